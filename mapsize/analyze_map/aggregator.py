"""Running totals for one map file scan."""

from __future__ import annotations

from collections.abc import Iterable
import logging

from .const import IGNORED_REGIONS, SECTION_OTHER
from .helpers import map_section_name
from .models import (
    MapAnalysis,
    MemoryRegion,
    MemoryUsage,
    OutputSection,
    SymbolRecord,
    freeze_mapping,
)

_LOGGER = logging.getLogger(__name__)

UNCLASSIFIED = "(unclassified)"


class Aggregator:
    """Fold regions and symbol records into per-region, archive and object totals.

    Every accepted record is counted exactly once: either against the first
    registered region containing its address, or in the unclassified bucket.
    Archive and object file breakdowns only cover region-attributed records.
    """

    def __init__(self, ignored_regions: Iterable[str] = IGNORED_REGIONS) -> None:
        self.ignored_regions = frozenset(ignored_regions)
        self._regions: dict[str, MemoryRegion] = {}
        self._region_spans: tuple[MemoryRegion, ...] = ()
        self._region_usage: dict[str, MemoryUsage] = {}
        self._archives: dict[str, MemoryUsage] = {}
        self._object_files: dict[str, MemoryUsage] = {}
        self._output_sections: dict[str, OutputSection] = {}
        self._unclassified = MemoryUsage(UNCLASSIFIED)
        self.symbol_count = 0
        self.matched_bytes = 0
        self.malformed_region_lines = 0

    def add_region(self, region: MemoryRegion) -> None:
        if region.name in self.ignored_regions:
            _LOGGER.debug("Ignoring memory region %s", region.name)
            return
        if (previous := self._regions.get(region.name)) is not None:
            _LOGGER.debug(
                "Memory region %s redefined: 0x%x/0x%x replaces 0x%x/0x%x",
                region.name,
                region.origin,
                region.length,
                previous.origin,
                previous.length,
            )
        else:
            _LOGGER.debug(
                "Memory region %s at 0x%x, %d bytes",
                region.name,
                region.origin,
                region.length,
            )
            self._region_usage[region.name] = MemoryUsage(region.name)
        # A redefinition keeps the position of the first definition
        self._regions[region.name] = region
        self._region_spans = tuple(self._regions.values())

    def add_output_section(self, section: OutputSection) -> None:
        self._output_sections[section.name] = section

    def count_malformed_region_line(self) -> None:
        self.malformed_region_lines += 1

    def find_region(self, address: int) -> MemoryRegion | None:
        for region in self._region_spans:
            if region.contains(address):
                return region
        return None

    def add_symbol(self, record: SymbolRecord) -> None:
        size = record.size
        # Output section first, then the input section named on the line
        section_kind = map_section_name(record.section)
        if section_kind == SECTION_OTHER:
            section_kind = map_section_name(record.symbol_name)
        self.symbol_count += 1
        self.matched_bytes += size

        if (region := self.find_region(record.address)) is None:
            self._unclassified.add_section_size(section_kind, size)
            return
        self._region_usage[region.name].add_section_size(section_kind, size)

        if record.archive_name is not None:
            if (archive := self._archives.get(record.archive_name)) is None:
                archive = self._archives[record.archive_name] = MemoryUsage(
                    record.archive_name
                )
            archive.add_section_size(section_kind, size)

        key = record.object_key
        if (object_file := self._object_files.get(key)) is None:
            object_file = self._object_files[key] = MemoryUsage(key)
        object_file.add_section_size(section_kind, size)

    def snapshot(self, lines_read: int = 0, early_exit: bool = False) -> MapAnalysis:
        """Return an immutable copy of the current totals."""

        def frozen_usage(usages: dict[str, MemoryUsage]):
            return freeze_mapping(
                {name: usage.freeze() for name, usage in usages.items()}
            )

        return MapAnalysis(
            regions=freeze_mapping(self._regions),
            region_usage=frozen_usage(self._region_usage),
            archives=frozen_usage(self._archives),
            object_files=frozen_usage(self._object_files),
            output_sections=freeze_mapping(self._output_sections),
            unclassified=self._unclassified.freeze(),
            symbol_count=self.symbol_count,
            matched_bytes=self.matched_bytes,
            malformed_region_lines=self.malformed_region_lines,
            lines_read=lines_read,
            early_exit=early_exit,
        )
