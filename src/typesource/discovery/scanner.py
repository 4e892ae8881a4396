"""Package scanner and the lazily computed class inventory."""

from __future__ import annotations

import inspect
import logging
import pkgutil
import time
from types import ModuleType
from typing import Callable, Iterator

from typesource.discovery.loader import NESTED_SEPARATOR, LoadingContext
from typesource.discovery.types import ScanResult
from typesource.errors import EnumerationError

logger = logging.getLogger(__name__)

__all__ = ["LazyInventory", "PackageScanner", "is_interface"]


def is_interface(cls: type) -> bool:
    """Abstract classes and typing.Protocol classes count as interfaces."""
    return inspect.isabstract(cls) or bool(getattr(cls, "_is_protocol", False))


class PackageScanner:
    """Enumerate every class defined under a set of root packages.

    Classes are named ``module.ClassName``; nested classes append
    ``$Inner`` to their enclosing class name. Aliases and re-exports are
    ignored, each class is reported once, under the module defining it.
    """

    def __init__(
        self,
        packages: list[str],
        loading_context: LoadingContext | None = None,
        skip_private: bool = True,
        max_depth: int = 8,
    ) -> None:
        self._packages = list(packages)
        self._loading_context = loading_context or LoadingContext()
        self._skip_private = skip_private
        self._max_depth = max_depth

    def __call__(self) -> ScanResult:
        standard: list[str] = []
        interface: list[str] = []
        seen: set[str] = set()

        with self._loading_context.activate():
            for package_name in self._packages:
                root = self._import(package_name)
                for module in self._walk(root, depth=1):
                    for name, cls in self._classes_in(module):
                        if name in seen:
                            continue
                        seen.add(name)
                        (interface if is_interface(cls) else standard).append(name)

        return ScanResult.of(standard, interface)

    def _import(self, module_name: str) -> ModuleType:
        try:
            return self._loading_context.import_module(module_name)
        except Exception as exc:
            raise EnumerationError(package=module_name, reason=str(exc), cause=exc) from exc

    def _walk(self, module: ModuleType, depth: int) -> Iterator[ModuleType]:
        yield module
        path = getattr(module, "__path__", None)
        if path is None:
            return
        if depth >= self._max_depth:
            logger.info("Max depth %d reached at %s, skipping submodules", self._max_depth, module.__name__)
            return
        for info in pkgutil.iter_modules(path, prefix=module.__name__ + "."):
            leaf = info.name.rsplit(".", 1)[-1]
            if self._skip_private and leaf.startswith("_"):
                continue
            yield from self._walk(self._import(info.name), depth + 1)

    def _classes_in(self, module: ModuleType) -> Iterator[tuple[str, type]]:
        for attr, obj in list(vars(module).items()):
            if inspect.isclass(obj) and obj.__module__ == module.__name__ and obj.__qualname__ == attr:
                yield from self._with_nested(f"{module.__name__}.{attr}", obj)

    def _with_nested(self, name: str, cls: type) -> Iterator[tuple[str, type]]:
        yield name, cls
        for attr, obj in list(vars(cls).items()):
            if inspect.isclass(obj) and obj.__qualname__ == f"{cls.__qualname__}.{attr}":
                yield from self._with_nested(f"{name}{NESTED_SEPARATOR}{attr}", obj)


class LazyInventory:
    """Compute-once cell around an expensive class enumeration.

    The enumerator runs on the first ``scan()`` only; its failures propagate
    unchanged and leave the cell empty.
    """

    def __init__(self, enumerate_symbols: Callable[[], ScanResult]) -> None:
        self._enumerate_symbols = enumerate_symbols
        self._scanned = False
        self._result: ScanResult = ScanResult()

    @property
    def scanned(self) -> bool:
        return self._scanned

    def scan(self) -> ScanResult:
        if not self._scanned:
            logger.info("Scanning classes")
            start = time.monotonic()
            result = self._enumerate_symbols()
            elapsed = time.monotonic() - start
            logger.info("Scanning finished in %.2f seconds. Total number of classes: %d.", elapsed, len(result))
            self._result = result
            self._scanned = True
        return self._result
