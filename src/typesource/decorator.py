"""Class decorator marking resource classes for automatic discovery."""

from __future__ import annotations

from typing import Any, Callable, TypeVar, overload

__all__ = ["RESOURCE_ATTR", "is_resource", "resource"]

RESOURCE_ATTR = "__typesource_resource__"

_T = TypeVar("_T", bound=type)


@overload
def resource(cls: _T) -> _T: ...


@overload
def resource(cls: None = None, *, path: str | None = None) -> Callable[[_T], _T]: ...


def resource(cls: Any = None, *, path: str | None = None) -> Any:
    """Mark a class as a resource picked up by automatic application discovery.

    Usable bare (``@resource``) or with arguments (``@resource(path="/users")``).
    The optional ``path`` is stored on the class for the code generator.
    """

    def decorator(target: _T) -> _T:
        setattr(target, RESOURCE_ATTR, {"path": path})
        return target

    if cls is not None:
        return decorator(cls)
    return decorator


def is_resource(cls: type) -> bool:
    """Check if the class itself (not a base class) was marked with @resource."""
    return RESOURCE_ATTR in vars(cls)
