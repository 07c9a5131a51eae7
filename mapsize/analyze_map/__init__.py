"""Memory usage analyzer for GNU ld map files."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path

from mapsize.core import MalformedRegionLine, MapReadError

from .aggregator import UNCLASSIFIED, Aggregator
from .helpers import (
    LineClassifier,
    parse_output_section,
    parse_region_line,
    parse_section_continuation,
)
from .models import (
    AnalyzerSettings,
    MapAnalysis,
    MemoryRegion,
    OutputSection,
    SymbolRecord,
    UsageTotals,
)
from .tracker import RegionTracker, ScanState

__all__ = [
    "UNCLASSIFIED",
    "AnalyzerSettings",
    "MapAnalysis",
    "MapAnalyzer",
    "MemoryRegion",
    "SymbolRecord",
    "UsageTotals",
    "analyze_map_file",
]

_LOGGER = logging.getLogger(__name__)

_INDENT_OR_EOL = frozenset(" \t\r\n")


class MapAnalyzer:
    """Single pass analyzer for linker map files.

    Each call to :meth:`analyze` owns a fresh tracker and aggregator, so one
    analyzer can be reused for many files.
    """

    def __init__(self, settings: AnalyzerSettings | None = None) -> None:
        """Initialize map analyzer.

        Args:
            settings: Format details (heading markers, object suffixes,
                ignored regions). Defaults match GNU ld output.
        """
        self.settings = settings or AnalyzerSettings()
        self.classifier = LineClassifier(self.settings.object_suffixes)

    def _create_tracker(self) -> RegionTracker:
        settings = self.settings
        return RegionTracker(
            settings.memory_config_marker,
            settings.memory_map_marker,
            settings.trailer_marker if settings.early_exit else None,
        )

    def analyze(self, lines: Iterable[str]) -> MapAnalysis:
        """Scan map file lines and return the aggregated totals.

        Args:
            lines: Line iterator over the map file, consumed strictly forward

        Raises:
            MapReadError: The iterator failed part way through; no totals are
                returned for a partial read.
        """
        tracker = self._create_tracker()
        aggregator = Aggregator(self.settings.ignored_regions)
        try:
            self._scan(lines, tracker, aggregator)
        except (OSError, UnicodeDecodeError) as err:
            raise MapReadError(
                f"Failed to read map file at line {tracker.line_number + 1}: {err}"
            ) from err

        analysis = aggregator.snapshot(
            lines_read=tracker.line_number, early_exit=tracker.finished
        )
        _LOGGER.info(
            "Read %d lines, %d symbols in %d regions (%s)",
            analysis.lines_read,
            analysis.symbol_count,
            len(analysis.regions),
            "stopped at trailer" if analysis.early_exit else "end of input",
        )
        if analysis.unclassified.symbol_count:
            _LOGGER.debug(
                "%d symbols (%d bytes) outside every memory region",
                analysis.unclassified.symbol_count,
                analysis.unclassified.total,
            )
        return analysis

    def _scan(
        self, lines: Iterable[str], tracker: RegionTracker, aggregator: Aggregator
    ) -> None:
        feed = tracker.feed
        maybe_symbol_line = self.classifier.maybe_symbol_line
        classify_symbol = self.classifier.classify_symbol
        add_symbol = aggregator.add_symbol
        section = ""
        wrapped_section: str | None = None

        for line in lines:
            if not feed(line):
                if tracker.finished:
                    _LOGGER.debug(
                        "Trailer marker on line %d, skipping rest of file",
                        tracker.line_number,
                    )
                    break
                continue

            if tracker.state is ScanState.MEMORY_CONFIG:
                try:
                    region = parse_region_line(line)
                except MalformedRegionLine as err:
                    _LOGGER.debug("Line %d: %s", tracker.line_number, err)
                    aggregator.count_malformed_region_line()
                    continue
                if region is not None:
                    aggregator.add_region(region)
                continue

            if wrapped_section is not None:
                name, wrapped_section = wrapped_section, None
                if (position := parse_section_continuation(line)) is not None:
                    aggregator.add_output_section(OutputSection(name, *position))
                    continue

            first = line[:1]
            if first == ".":
                if (header := parse_output_section(line)) is not None:
                    section, address, size = header
                    if address is None:
                        wrapped_section = section
                    else:
                        aggregator.add_output_section(
                            OutputSection(section, address, size)
                        )
                    continue
            elif first not in _INDENT_OR_EOL:
                # Any other top level line (LOAD, OUTPUT, a heading) closes
                # the output section
                section = ""

            if maybe_symbol_line(line) and (
                record := classify_symbol(line, section)
            ) is not None:
                add_symbol(record)


def analyze_map_file(
    path: str | Path, settings: AnalyzerSettings | None = None
) -> MapAnalysis:
    """Analyze the map file at ``path``.

    The file is decoded as UTF-8 with replacement characters, which keeps
    any ASCII-compatible map readable.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return MapAnalyzer(settings).analyze(f)
    except OSError as err:
        raise MapReadError(f"Failed to read map file {path}: {err}") from err
