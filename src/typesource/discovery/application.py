"""Automatic discovery of application entry points and their classes."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable

from typesource.decorator import is_resource
from typesource.discovery.loader import LoadingContext
from typesource.discovery.scanner import LazyInventory
from typesource.discovery.types import SourceType
from typesource.errors import TypeResolutionError

logger = logging.getLogger(__name__)

__all__ = ["Application", "ApplicationScanner", "scan_automatic_application"]

ApplicationScanner = Callable[[LazyInventory, Callable[[str], bool], LoadingContext], list[SourceType]]


class Application:
    """Base class for application entry points.

    Subclasses list the classes that make up the application; automatic
    discovery instantiates every concrete subclass it finds and collects
    the result of ``get_classes()``.
    """

    def get_classes(self) -> list[type]:
        return []


def _is_application_class(cls: type) -> bool:
    return issubclass(cls, Application) and cls is not Application and not inspect.isabstract(cls)


def _load_candidate(name: str, loading_context: LoadingContext) -> type | None:
    try:
        return loading_context.load(name)
    except TypeResolutionError as e:
        logger.debug("Skipping unloadable class '%s': %s", name, e)
        return None


def _application_types(app_cls: type[Application]) -> list[SourceType]:
    types: list[SourceType] = []
    for item in app_cls().get_classes():
        if not inspect.isclass(item):
            logger.warning("Application '%s' returned a non-class entry: %r", app_cls.__qualname__, item)
            continue
        types.append(SourceType(item))
    return types


def scan_automatic_application(
    inventory: LazyInventory,
    is_excluded: Callable[[str], bool],
    loading_context: LoadingContext,
) -> list[SourceType]:
    """Find the classes of the application living in the scanned packages.

    Every concrete ``Application`` subclass contributes its ``get_classes()``.
    Without any application, every class marked with ``@resource`` is used.
    Excluded names are never loaded.
    """
    candidates: list[tuple[str, Any]] = []
    for name in inventory.scan().standard_names:
        if is_excluded(name):
            continue
        cls = _load_candidate(name, loading_context)
        if cls is not None:
            candidates.append((name, cls))

    applications = [cls for _, cls in candidates if _is_application_class(cls)]
    if applications:
        types: list[SourceType] = []
        for app_cls in applications:
            logger.info("Found application '%s'", app_cls.__qualname__)
            types.extend(_application_types(app_cls))
        return types

    resources = [SourceType(cls) for _, cls in candidates if is_resource(cls)]
    logger.info("Found %d resource classes.", len(resources))
    return resources
