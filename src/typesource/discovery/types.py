"""Discovery types: SourceType, ScanResult."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

__all__ = [
    "SourceType",
    "ScanResult",
]


@dataclass(frozen=True)
class SourceType:
    """A loaded class handed to the code generator.

    Attributes:
        type: The loaded class.
        used_in_class: Class in which this type was found, if any.
        used_in_member: Member name through which this type was found, if any.
    """

    type: Any
    used_in_class: Any = None
    used_in_member: str | None = None


@dataclass(frozen=True)
class ScanResult:
    """Snapshot of every class name visible to the scanner."""

    all_names: tuple[str, ...] = ()
    standard_names: tuple[str, ...] = ()
    interface_names: tuple[str, ...] = ()

    @classmethod
    def of(cls, standard_names: Iterable[str] = (), interface_names: Iterable[str] = ()) -> ScanResult:
        """Build a ScanResult whose ``all_names`` is standard then interface names."""
        standard = tuple(standard_names)
        interface = tuple(interface_names)
        return cls(all_names=standard + interface, standard_names=standard, interface_names=interface)

    def __len__(self) -> int:
        return len(self.all_names)
