"""Shared test fixtures for the typesource test suite."""

from __future__ import annotations

import sys
import textwrap
import uuid
from pathlib import Path
from typing import Any, Callable

import pytest

from typesource.discovery.loader import LoadingContext
from typesource.discovery.types import ScanResult
from typesource.errors import TypeResolutionError


# === Stub collaborators ===


class StubLoadingContext(LoadingContext):
    """Loads classes from a name -> class mapping instead of importing."""

    def __init__(self, classes: dict[str, type]) -> None:
        super().__init__()
        self.classes = classes
        self.loaded: list[str] = []

    def load(self, class_name: str) -> type:
        self.loaded.append(class_name)
        try:
            return self.classes[class_name]
        except KeyError:
            raise TypeResolutionError(class_name=class_name, reason="not in stub") from None


class CountingEnumerator:
    """Enumerator returning a fixed ScanResult and counting its calls."""

    def __init__(self, result: ScanResult | None = None, error: Exception | None = None) -> None:
        self.result = result or ScanResult()
        self.error = error
        self.calls = 0

    def __call__(self) -> ScanResult:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


def make_class(name: str, **attrs: Any) -> type:
    """Create a module-level looking class with the given name."""
    cls = type(name, (), dict(attrs))
    cls.__qualname__ = name
    return cls


# === Fixtures ===


@pytest.fixture
def stub_context() -> Callable[[dict[str, type]], StubLoadingContext]:
    return StubLoadingContext


@pytest.fixture
def counting_enumerator() -> Callable[..., CountingEnumerator]:
    return CountingEnumerator


@pytest.fixture
def make_package(tmp_path: Path) -> Any:
    """Factory writing a throw-away package under tmp_path.

    Takes a mapping of relative module paths to source code and returns
    ``(package_name, LoadingContext)``. The package name is unique per call,
    its modules are removed from sys.modules after the test.
    """
    created: list[str] = []

    def factory(files: dict[str, str]) -> tuple[str, LoadingContext]:
        package = f"ts_sample_{uuid.uuid4().hex[:12]}"
        root = tmp_path / package
        root.mkdir()
        (root / "__init__.py").write_text(files.get("__init__.py", ""))
        for rel_path, source in files.items():
            if rel_path == "__init__.py":
                continue
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            for parent in path.relative_to(root).parents:
                init = root / parent / "__init__.py"
                if not init.exists():
                    init.write_text("")
            path.write_text(textwrap.dedent(source))
        created.append(package)
        return package, LoadingContext(search_paths=[tmp_path])

    yield factory

    for name in list(sys.modules):
        if any(name == pkg or name.startswith(pkg + ".") for pkg in created):
            del sys.modules[name]
