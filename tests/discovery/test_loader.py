"""Tests for class loading: LoadingContext, is_synthetic(), is_anonymous(), resolve_names()."""

from __future__ import annotations

import sys
from typing import Any

import pytest

from typesource.discovery.loader import LoadingContext, is_anonymous, is_synthetic, resolve_names
from typesource.discovery.types import SourceType
from typesource.errors import TypeResolutionError

MODELS = """
class User:
    class Address:
        class Geo:
            pass

class Order:
    pass

def helper():
    return 1

GeneratedSwitchMap = type("GeneratedSwitchMap", (), {"__synthetic__": True})

def make_local():
    class Local:
        pass
    return Local

LocalClass = make_local()
"""

BROKEN = """
import ts_definitely_missing_dependency

class Foo:
    pass
"""


class TestLoadingContextLoad:
    def test_loads_module_level_class(self, make_package: Any) -> None:
        """A 'package.module.Class' name loads the class."""
        pkg, ctx = make_package({"models.py": MODELS})
        cls = ctx.load(f"{pkg}.models.User")
        assert cls.__name__ == "User"
        assert cls.__module__ == f"{pkg}.models"

    def test_loads_nested_class_with_dollar(self, make_package: Any) -> None:
        """'$' steps into nested classes."""
        pkg, ctx = make_package({"models.py": MODELS})
        cls = ctx.load(f"{pkg}.models.User$Address$Geo")
        assert cls.__qualname__ == "User.Address.Geo"

    def test_loads_nested_class_with_dot(self, make_package: Any) -> None:
        """Dotted nested names resolve through attribute lookup."""
        pkg, ctx = make_package({"models.py": MODELS})
        assert ctx.load(f"{pkg}.models.User.Address").__qualname__ == "User.Address"

    def test_loads_from_subpackage(self, make_package: Any) -> None:
        """Longest importable prefix is used as the module."""
        pkg, ctx = make_package({"api/v1/resources.py": "class Thing:\n    pass\n"})
        assert ctx.load(f"{pkg}.api.v1.resources.Thing").__name__ == "Thing"

    def test_loads_stdlib_class(self) -> None:
        """Classes from already importable modules load without search paths."""
        from collections import OrderedDict

        assert LoadingContext().load("collections.OrderedDict") is OrderedDict

    def test_missing_module_raises(self) -> None:
        """An unknown module raises TypeResolutionError naming the class."""
        with pytest.raises(TypeResolutionError) as exc_info:
            LoadingContext().load("ts_no_such_package.Foo")
        assert exc_info.value.class_name == "ts_no_such_package.Foo"

    def test_missing_attribute_raises(self, make_package: Any) -> None:
        """An unknown class in an existing module raises TypeResolutionError."""
        pkg, ctx = make_package({"models.py": MODELS})
        with pytest.raises(TypeResolutionError, match="Missing"):
            ctx.load(f"{pkg}.models.Missing")

    def test_function_is_not_a_class(self, make_package: Any) -> None:
        """Names that resolve to non-classes are rejected."""
        pkg, ctx = make_package({"models.py": MODELS})
        with pytest.raises(TypeResolutionError, match="Not a class"):
            ctx.load(f"{pkg}.models.helper")

    def test_bare_module_name_is_not_a_class(self, make_package: Any) -> None:
        """A name without a class part cannot be loaded."""
        pkg, ctx = make_package({"models.py": MODELS})
        with pytest.raises(TypeResolutionError):
            ctx.load(pkg)

    def test_malformed_name_raises(self) -> None:
        """Empty segments are rejected."""
        with pytest.raises(TypeResolutionError, match="Malformed"):
            LoadingContext().load("a..B")

    @pytest.mark.parametrize("name", ["collections.OrderedDict$", "a.Outer$", "a.Outer$$Inner", "$Inner"])
    def test_empty_nested_segment_raises(self, name: str) -> None:
        """A dangling or doubled nesting separator is rejected."""
        with pytest.raises(TypeResolutionError, match="Malformed"):
            LoadingContext().load(name)

    def test_broken_dependency_is_not_masked(self, make_package: Any) -> None:
        """A module failing on its own imports raises instead of being skipped."""
        pkg, ctx = make_package({"broken.py": BROKEN})
        with pytest.raises(TypeResolutionError, match="ts_definitely_missing_dependency"):
            ctx.load(f"{pkg}.broken.Foo")

    def test_search_path_not_visible_without_context(self, make_package: Any) -> None:
        """Packages under search_paths are only importable through the context."""
        pkg, _ = make_package({"models.py": MODELS})
        with pytest.raises(TypeResolutionError):
            LoadingContext().load(f"{pkg}.models.User")


class TestLoadingContextActivate:
    def test_prepends_and_restores_sys_path(self, tmp_path: Any) -> None:
        """sys.path gets the search paths while active and is restored afterwards."""
        before = list(sys.path)
        ctx = LoadingContext(search_paths=[tmp_path])
        with ctx.activate():
            assert sys.path[0] == str(tmp_path)
        assert sys.path == before

    def test_restores_on_exception(self, tmp_path: Any) -> None:
        """sys.path is restored when the body raises."""
        before = list(sys.path)
        with pytest.raises(RuntimeError):
            with LoadingContext(search_paths=[tmp_path]).activate():
                raise RuntimeError("boom")
        assert sys.path == before

    def test_nested_activation(self, tmp_path: Any) -> None:
        """Nested activations do not duplicate entries and restore cleanly."""
        before = list(sys.path)
        ctx = LoadingContext(search_paths=[tmp_path])
        with ctx.activate():
            with ctx.activate():
                assert sys.path.count(str(tmp_path)) == 1
            assert sys.path[0] == str(tmp_path)
        assert sys.path == before

    def test_repr(self) -> None:
        assert repr(LoadingContext(search_paths=["/x"])) == "LoadingContext(search_paths=['/x'])"


class TestSyntheticAndAnonymous:
    def test_plain_class_is_neither(self) -> None:
        plain = type("Plain", (), {})
        assert not is_synthetic(plain)
        assert not is_anonymous(plain)

    def test_synthetic_marker(self) -> None:
        """An own __synthetic__ = True marks a class synthetic."""
        assert is_synthetic(type("Gen", (), {"__synthetic__": True}))

    def test_synthetic_marker_not_inherited(self) -> None:
        """Subclasses of a synthetic class are not synthetic themselves."""
        base = type("Gen", (), {"__synthetic__": True})
        assert not is_synthetic(type("Child", (base,), {}))

    def test_non_identifier_name_is_synthetic(self) -> None:
        assert is_synthetic(type("<generated>", (), {}))

    def test_local_class_is_anonymous(self) -> None:
        """Classes defined in a function body have no stable name."""

        class Local:
            pass

        assert is_anonymous(Local)

    def test_module_level_class_is_not_anonymous(self) -> None:
        assert not is_anonymous(SourceType)


class TestResolveNames:
    def test_resolves_in_input_order(self, make_package: Any) -> None:
        """Loaded classes are wrapped in SourceType in input order."""
        pkg, ctx = make_package({"models.py": MODELS})
        result = resolve_names([f"{pkg}.models.Order", f"{pkg}.models.User"], ctx)
        assert [st.type.__name__ for st in result] == ["Order", "User"]
        assert all(st.used_in_class is None and st.used_in_member is None for st in result)

    def test_skips_synthetic(self, make_package: Any) -> None:
        """A synthetic class is dropped, the ordinary one kept."""
        pkg, ctx = make_package({"models.py": MODELS})
        result = resolve_names([f"{pkg}.models.GeneratedSwitchMap", f"{pkg}.models.Order"], ctx)
        assert [st.type.__name__ for st in result] == ["Order"]

    def test_skips_anonymous(self, make_package: Any) -> None:
        """A class defined inside a function is dropped."""
        pkg, ctx = make_package({"models.py": MODELS})
        result = resolve_names([f"{pkg}.models.LocalClass", f"{pkg}.models.User"], ctx)
        assert [st.type.__name__ for st in result] == ["User"]

    def test_fails_fast(self, stub_context: Any) -> None:
        """The first unloadable name aborts, later names are not loaded."""
        ctx = stub_context({"a.A": type("A", (), {}), "a.C": type("C", (), {})})
        with pytest.raises(TypeResolutionError) as exc_info:
            resolve_names(["a.A", "a.B", "a.C"], ctx)
        assert exc_info.value.class_name == "a.B"
        assert ctx.loaded == ["a.A", "a.B"]

    def test_empty_names(self, stub_context: Any) -> None:
        assert resolve_names([], stub_context({})) == []
