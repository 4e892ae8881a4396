"""Discovery request: the aggregate input of one discovery pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from typesource.config import Config, build_exclusion_predicate
from typesource.discovery.loader import LoadingContext

__all__ = ["DiscoveryRequest", "exclude_nothing"]


def exclude_nothing(name: str) -> bool:
    return False


@dataclass
class DiscoveryRequest:
    """Everything one discovery pass needs to know.

    Each strategy runs only when its field is set: explicit ``class_names``,
    ``class_name_patterns`` matched against the scanned inventory,
    one ``application_class_name``, and ``automatic_application`` scanning.
    ``is_excluded`` is handed to the automatic application scanner.
    """

    class_names: list[str] | None = None
    class_name_patterns: list[str] | None = None
    application_class_name: str | None = None
    automatic_application: bool = False
    is_excluded: Callable[[str], bool] = exclude_nothing
    loading_context: LoadingContext = field(default_factory=LoadingContext)

    @classmethod
    def from_config(cls, config: Config, loading_context: LoadingContext | None = None) -> DiscoveryRequest:
        """Build a request from the ``discovery`` and ``scan`` config sections."""
        settings = config.discovery
        if loading_context is None:
            loading_context = LoadingContext(search_paths=config.scan.search_paths)
        return cls(
            class_names=settings.class_names,
            class_name_patterns=settings.class_name_patterns,
            application_class_name=settings.application_class_name,
            automatic_application=settings.automatic_application,
            is_excluded=build_exclusion_predicate(
                settings.exclude_class_names,
                settings.exclude_class_name_patterns,
            ),
            loading_context=loading_context,
        )
