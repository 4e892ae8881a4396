"""typesource - Class discovery for code generators."""

from __future__ import annotations

# Core
from typesource.discovery import (
    Application,
    Discovery,
    DiscoveryRequest,
    DiscoveryResult,
    LazyInventory,
    LoadingContext,
    PackageScanner,
    ScanResult,
    SourceType,
    discover,
)

# Decorators
from typesource.decorator import resource

# Config
from typesource.config import Config, build_exclusion_predicate

# Patterns
from typesource.utils.pattern import GlobPattern, compile_glob, matches_any

# Errors
from typesource.errors import (
    ConfigError,
    ConfigNotFoundError,
    EnumerationError,
    ErrorCodes,
    InvalidInputError,
    NothingDiscoveredError,
    TypeResolutionError,
    TypesourceError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Discovery",
    "DiscoveryRequest",
    "DiscoveryResult",
    "LazyInventory",
    "LoadingContext",
    "PackageScanner",
    "ScanResult",
    "SourceType",
    "discover",
    # Application entry points
    "Application",
    "resource",
    # Config
    "Config",
    "build_exclusion_predicate",
    # Patterns
    "GlobPattern",
    "compile_glob",
    "matches_any",
    # Errors
    "ErrorCodes",
    "TypesourceError",
    "ConfigError",
    "ConfigNotFoundError",
    "InvalidInputError",
    "EnumerationError",
    "TypeResolutionError",
    "NothingDiscoveredError",
]
