"""Discovery aggregator: merges every discovery strategy into one result."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator

from typesource.config import Config
from typesource.discovery.application import ApplicationScanner, scan_automatic_application
from typesource.discovery.loader import LoadingContext, resolve_names
from typesource.discovery.request import DiscoveryRequest
from typesource.discovery.scanner import LazyInventory, PackageScanner
from typesource.discovery.types import ScanResult, SourceType
from typesource.errors import InvalidInputError, NothingDiscoveredError
from typesource.utils.pattern import filter_names

logger = logging.getLogger(__name__)

__all__ = ["Discovery", "DiscoveryResult", "discover"]


class DiscoveryResult:
    """Ordered, duplicate-free list of the classes to process."""

    def __init__(self, source_types: Iterable[SourceType]) -> None:
        # context metadata may be unhashable, so compare by equality
        unique: list[SourceType] = []
        for source_type in source_types:
            if source_type not in unique:
                unique.append(source_type)
        self._source_types = tuple(unique)

    @classmethod
    def from_types(cls, *types: type) -> DiscoveryResult:
        """Wrap already loaded classes without running any discovery."""
        return cls(SourceType(t) for t in types)

    @property
    def source_types(self) -> tuple[SourceType, ...]:
        return self._source_types

    @property
    def types(self) -> list[type]:
        return [st.type for st in self._source_types]

    def __iter__(self) -> Iterator[SourceType]:
        return iter(self._source_types)

    def __len__(self) -> int:
        return len(self._source_types)

    def __repr__(self) -> str:
        return f"DiscoveryResult({list(self._source_types)!r})"


class Discovery:
    """Resolve a DiscoveryRequest into the classes it designates."""

    def __init__(
        self,
        config: Config | None = None,
        enumerator: Callable[[], ScanResult] | None = None,
        application_scanner: ApplicationScanner | None = None,
    ) -> None:
        """Initialize the Discovery.

        Args:
            config: Optional Config; its ``scan`` section feeds the default enumerator.
            enumerator: Produces the class inventory. Defaults to a PackageScanner
                over ``scan.packages``.
            application_scanner: Finds application classes in the inventory.
                Defaults to scan_automatic_application.
        """
        self._config = config or Config()
        self._enumerator = enumerator
        self._application_scanner = application_scanner or scan_automatic_application

    def inventory(self, loading_context: LoadingContext) -> LazyInventory:
        """Create an unscanned inventory bound to this discovery's enumerator."""
        if self._enumerator is not None:
            return LazyInventory(self._enumerator)
        scan = self._config.scan
        if not scan.packages:
            logger.warning("No packages configured for scanning")
        return LazyInventory(
            PackageScanner(scan.packages, loading_context=loading_context, skip_private=scan.skip_private)
        )

    def discover(self, request: DiscoveryRequest, inventory: LazyInventory | None = None) -> DiscoveryResult:
        """Run every strategy enabled in the request, in a fixed order.

        Order: explicit class names, pattern matches, application class,
        automatic application discovery. All strategies share one inventory,
        scanned at most once.

        Args:
            request: What to discover.
            inventory: Inventory to reuse across calls. A fresh one is created
                when omitted.

        Returns:
            The merged DiscoveryResult.

        Raises:
            NothingDiscoveredError: If no strategy produced a class.
            TypeResolutionError: If a named class cannot be loaded.
            EnumerationError: If the inventory scan fails.
        """
        loading_context = request.loading_context
        with loading_context.activate():
            if inventory is None:
                inventory = self.inventory(loading_context)
            types: list[SourceType] = []

            if request.class_names:
                types.extend(resolve_names(request.class_names, loading_context))

            if request.class_name_patterns:
                types.extend(self._from_patterns(inventory, request.class_name_patterns, loading_context))

            if request.application_class_name is not None:
                types.extend(resolve_names([request.application_class_name], loading_context))

            if request.automatic_application:
                types.extend(self._application_scanner(inventory, request.is_excluded, loading_context))

            if not types:
                error = NothingDiscoveredError()
                logger.error(error.message)
                raise error

            return DiscoveryResult(types)

    @staticmethod
    def _from_patterns(
        inventory: LazyInventory,
        patterns: list[str],
        loading_context: LoadingContext,
    ) -> list[SourceType]:
        scan = inventory.scan()
        all_names = sorted([*scan.standard_names, *scan.interface_names])
        class_names = filter_names(all_names, patterns)
        logger.info("Found %d classes matching pattern.", len(class_names))
        return resolve_names(class_names, loading_context)


def discover(
    request: DiscoveryRequest | None = None,
    *,
    config: Config | None = None,
    enumerator: Callable[[], ScanResult] | None = None,
    application_scanner: ApplicationScanner | None = None,
) -> DiscoveryResult:
    """Shortcut for ``Discovery(...).discover(request)``.

    Without a request, one is built from the config's ``discovery`` section.
    """
    if request is None:
        if config is None:
            raise InvalidInputError(message="Either request or config is required")
        request = DiscoveryRequest.from_config(config)
    return Discovery(config=config, enumerator=enumerator, application_scanner=application_scanner).discover(request)
