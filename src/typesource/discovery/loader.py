"""Class loading by fully-qualified name."""

from __future__ import annotations

import importlib
import inspect
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from types import ModuleType
from typing import Iterable, Iterator

from typesource.discovery.types import SourceType
from typesource.errors import TypeResolutionError

logger = logging.getLogger(__name__)

__all__ = ["LoadingContext", "is_anonymous", "is_synthetic", "resolve_names"]

NESTED_SEPARATOR = "$"


class LoadingContext:
    """Where and how class names are imported.

    Args:
        search_paths: Extra import roots, prepended to ``sys.path`` while the
            context is active.
    """

    def __init__(self, search_paths: Iterable[str | Path] = ()) -> None:
        self.search_paths: tuple[str, ...] = tuple(str(p) for p in search_paths)

    def __repr__(self) -> str:
        return f"LoadingContext(search_paths={list(self.search_paths)!r})"

    @contextmanager
    def activate(self) -> Iterator[LoadingContext]:
        """Make the search paths importable; ``sys.path`` is restored on exit."""
        saved = list(sys.path)
        added = [p for p in self.search_paths if p not in sys.path]
        if added:
            sys.path[:0] = added
            importlib.invalidate_caches()
        try:
            yield self
        finally:
            sys.path[:] = saved

    def import_module(self, module_name: str) -> ModuleType:
        with self.activate():
            return importlib.import_module(module_name)

    def load(self, class_name: str) -> type:
        """Load a class by its fully-qualified name.

        The longest importable dotted prefix is taken as the module, the rest
        is walked as attributes. ``$`` separates nested classes.

        Raises:
            TypeResolutionError: If no class exists under that name.
        """
        head, sep, nested = class_name.partition(NESTED_SEPARATOR)
        parts = head.split(".")
        nested_parts = nested.split(NESTED_SEPARATOR) if sep else []
        if not all(parts) or not all(nested_parts):
            raise TypeResolutionError(class_name=class_name, reason="Malformed class name")

        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            module = self._try_import(module_name, class_name)
            if module is not None:
                return self._walk(module, parts[split:] + nested_parts, class_name)

        raise TypeResolutionError(class_name=class_name, reason="No importable module in name")

    def _try_import(self, module_name: str, class_name: str) -> ModuleType | None:
        try:
            return self.import_module(module_name)
        except ModuleNotFoundError as exc:
            missing = exc.name or ""
            if module_name == missing or module_name.startswith(missing + "."):
                return None
            raise TypeResolutionError(class_name=class_name, reason=f"Failed to import module: {exc}") from exc
        except Exception as exc:
            raise TypeResolutionError(class_name=class_name, reason=f"Failed to import module: {exc}") from exc

    @staticmethod
    def _walk(module: ModuleType, attrs: list[str], class_name: str) -> type:
        target: object = module
        for attr in attrs:
            try:
                target = getattr(target, attr)
            except AttributeError as exc:
                raise TypeResolutionError(
                    class_name=class_name,
                    reason=f"'{attr}' not found in {getattr(target, '__name__', target)!s}",
                ) from exc
        if not inspect.isclass(target):
            raise TypeResolutionError(class_name=class_name, reason="Not a class")
        return target


def is_synthetic(cls: type) -> bool:
    """Check if a class was generated rather than written by hand.

    Generators mark their output with an own ``__synthetic__ = True``
    attribute. Classes whose name is not an identifier are synthetic too.
    """
    if cls.__dict__.get("__synthetic__", False) is True:
        return True
    return not cls.__name__.isidentifier()


def is_anonymous(cls: type) -> bool:
    """Check if a class has no stable name (defined in a function body)."""
    qualname = getattr(cls, "__qualname__", cls.__name__)
    return "<locals>" in qualname or "<lambda>" in qualname


def resolve_names(class_names: Iterable[str], loading_context: LoadingContext) -> list[SourceType]:
    """Load each class name and wrap it in a SourceType.

    Synthetic and anonymous classes are left out. The first name that
    cannot be loaded aborts the whole call.

    Raises:
        TypeResolutionError: If a name cannot be loaded.
    """
    types: list[SourceType] = []
    for class_name in class_names:
        cls = loading_context.load(class_name)
        if is_synthetic(cls) or is_anonymous(cls):
            logger.debug("Skipping synthetic or anonymous class '%s'", class_name)
            continue
        types.append(SourceType(cls))
    return types
