"""Data model for linker map analysis."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .const import (
    IGNORED_REGIONS,
    MEMORY_CONFIG_MARKER,
    MEMORY_MAP_MARKER,
    OBJECT_FILE_SUFFIXES,
    SECTION_OTHER,
    TRAILER_MARKER,
)


@dataclass(frozen=True, slots=True)
class MemoryRegion:
    """A named hardware memory area from the memory configuration block."""

    name: str
    origin: int
    length: int
    attributes: str = ""

    @property
    def end(self) -> int:
        """First address past the region."""
        return self.origin + self.length

    def contains(self, address: int) -> bool:
        return self.origin <= address < self.end


@dataclass(frozen=True, slots=True)
class OutputSection:
    """A top-level output section boundary from the memory map."""

    name: str
    address: int
    size: int


@dataclass(frozen=True, slots=True)
class SymbolRecord:
    """One classified input section or symbol line."""

    symbol_name: str
    address: int
    size: int
    archive_name: str | None
    object_file: str
    section: str = ""  # Enclosing output section, used for the section kind

    @property
    def object_key(self) -> str:
        """Object file key that keeps same-named archive members apart."""
        if self.archive_name is None:
            return self.object_file
        return f"{self.archive_name}({self.object_file})"


@dataclass
class MemoryUsage:
    """Running byte counters for one region, archive or object file."""

    name: str
    text_size: int = 0  # Code
    rodata_size: int = 0  # Read-only data
    data_size: int = 0  # Initialized data
    bss_size: int = 0  # Uninitialized data
    other_size: int = 0  # Sections with no known kind
    symbol_count: int = 0

    def add_section_size(self, section_kind: str, size: int) -> None:
        """Add size to the appropriate attribute for a section kind."""
        if section_kind == ".text":
            self.text_size += size
        elif section_kind == ".rodata":
            self.rodata_size += size
        elif section_kind == ".data":
            self.data_size += size
        elif section_kind == ".bss":
            self.bss_size += size
        else:
            self.other_size += size
        self.symbol_count += 1

    @property
    def total(self) -> int:
        return (
            self.text_size
            + self.rodata_size
            + self.data_size
            + self.bss_size
            + self.other_size
        )

    def freeze(self) -> UsageTotals:
        return UsageTotals(
            name=self.name,
            text_size=self.text_size,
            rodata_size=self.rodata_size,
            data_size=self.data_size,
            bss_size=self.bss_size,
            other_size=self.other_size,
            symbol_count=self.symbol_count,
        )


@dataclass(frozen=True, slots=True)
class UsageTotals:
    """Immutable counterpart of :class:`MemoryUsage` handed to reporting."""

    name: str
    text_size: int = 0
    rodata_size: int = 0
    data_size: int = 0
    bss_size: int = 0
    other_size: int = 0
    symbol_count: int = 0

    @property
    def total(self) -> int:
        return (
            self.text_size
            + self.rodata_size
            + self.data_size
            + self.bss_size
            + self.other_size
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "text": self.text_size,
            "rodata": self.rodata_size,
            "data": self.data_size,
            "bss": self.bss_size,
            SECTION_OTHER: self.other_size,
            "total": self.total,
            "symbol_count": self.symbol_count,
        }


@dataclass(frozen=True)
class MapAnalysis:
    """Finished aggregation snapshot of one map file.

    All mappings are read-only and keep first-seen order.
    """

    regions: Mapping[str, MemoryRegion]
    region_usage: Mapping[str, UsageTotals]
    archives: Mapping[str, UsageTotals]
    object_files: Mapping[str, UsageTotals]
    output_sections: Mapping[str, OutputSection]
    unclassified: UsageTotals
    symbol_count: int = 0
    matched_bytes: int = 0  # Sum of sizes of every accepted symbol line
    malformed_region_lines: int = 0
    lines_read: int = 0
    early_exit: bool = False

    def used_bytes(self, region: str) -> int:
        if (usage := self.region_usage.get(region)) is None:
            return 0
        return usage.total

    def free_bytes(self, region: str) -> int:
        return self.regions[region].length - self.used_bytes(region)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "regions": {
                name: {
                    "origin": region.origin,
                    "length": region.length,
                    "used": self.used_bytes(name),
                    "free": self.free_bytes(name),
                    **self.region_usage[name].to_dict(),
                }
                for name, region in self.regions.items()
            },
            "archives": {
                name: usage.to_dict() for name, usage in self.archives.items()
            },
            "object_files": {
                name: usage.to_dict() for name, usage in self.object_files.items()
            },
            "output_sections": {
                name: {"address": section.address, "size": section.size}
                for name, section in self.output_sections.items()
            },
            "unclassified": self.unclassified.to_dict(),
            "symbol_count": self.symbol_count,
            "matched_bytes": self.matched_bytes,
            "malformed_region_lines": self.malformed_region_lines,
            "lines_read": self.lines_read,
            "early_exit": self.early_exit,
        }


def freeze_mapping(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return a read-only, order-preserving copy of a mapping."""
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class AnalyzerSettings:
    """Tunable format details for the map scanner."""

    memory_config_marker: str = MEMORY_CONFIG_MARKER
    memory_map_marker: str = MEMORY_MAP_MARKER
    trailer_marker: str = TRAILER_MARKER
    early_exit: bool = True
    object_suffixes: tuple[str, ...] = OBJECT_FILE_SUFFIXES
    ignored_regions: frozenset[str] = IGNORED_REGIONS
