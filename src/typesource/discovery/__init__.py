"""typesource discovery system.

Resolves class names, class name patterns and application entry points into
the classes handed to the code generator.

Usage::

    from typesource.discovery import Discovery, DiscoveryRequest

    request = DiscoveryRequest(class_name_patterns=["myapp.models.*"])
    result = Discovery(config=config).discover(request)
"""

from __future__ import annotations

from typesource.discovery.application import Application, ApplicationScanner, scan_automatic_application
from typesource.discovery.discovery import Discovery, DiscoveryResult, discover
from typesource.discovery.loader import LoadingContext, is_anonymous, is_synthetic, resolve_names
from typesource.discovery.request import DiscoveryRequest, exclude_nothing
from typesource.discovery.scanner import LazyInventory, PackageScanner, is_interface
from typesource.discovery.types import ScanResult, SourceType

__all__ = [
    "Application",
    "ApplicationScanner",
    "Discovery",
    "DiscoveryRequest",
    "DiscoveryResult",
    "LazyInventory",
    "LoadingContext",
    "PackageScanner",
    "ScanResult",
    "SourceType",
    "discover",
    "exclude_nothing",
    "is_anonymous",
    "is_interface",
    "is_synthetic",
    "resolve_names",
    "scan_automatic_application",
]
