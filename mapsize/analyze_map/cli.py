"""Text report generation for map analysis results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mapsize.helpers import format_size

from . import MapAnalyzer

if TYPE_CHECKING:
    from collections.abc import Mapping

    from . import MapAnalysis, UsageTotals


class MapAnalyzerCLI(MapAnalyzer):
    """Map analyzer with CLI-specific report generation."""

    # Column width constants
    COL_REGION: int = 18
    COL_ADDRESS: int = 12
    COL_SIZE: int = 13
    COL_PERCENT: int = 7
    COL_NAME: int = 40
    COL_SEPARATOR: int = 3  # " | "

    REGION_COLUMNS: tuple[int, ...] = (
        COL_REGION,
        COL_ADDRESS,
        COL_SIZE,
        COL_SIZE,
        COL_SIZE,
        COL_PERCENT,
    )
    BREAKDOWN_COLUMNS: tuple[int, ...] = (
        COL_NAME,
        COL_SIZE,
        COL_SIZE,
        COL_SIZE,
        COL_SIZE,
        COL_SIZE,
    )

    TABLE_WIDTH: int = sum(REGION_COLUMNS) + COL_SEPARATOR * (len(REGION_COLUMNS) - 1)

    @staticmethod
    def _make_separator_line(*widths: int) -> str:
        """Create a separator line like "----+---------+-----"."""
        return "-+-".join("-" * width for width in widths)

    def _add_section_header(self, lines: list[str], title: str) -> None:
        """Add a section header with title centered between separator lines."""
        lines.append("")
        lines.append("=" * self.TABLE_WIDTH)
        lines.append(title.center(self.TABLE_WIDTH))
        lines.append("=" * self.TABLE_WIDTH)
        lines.append("")

    def _add_region_table(self, lines: list[str], analysis: MapAnalysis) -> None:
        lines.append(
            f"{'Region':<{self.COL_REGION}} | {'Origin':>{self.COL_ADDRESS}} | "
            f"{'Length':>{self.COL_SIZE}} | {'Used':>{self.COL_SIZE}} | "
            f"{'Free':>{self.COL_SIZE}} | {'Used %':>{self.COL_PERCENT}}"
        )
        lines.append(self._make_separator_line(*self.REGION_COLUMNS))
        for name, region in analysis.regions.items():
            used = analysis.used_bytes(name)
            percentage = (used / region.length * 100) if region.length > 0 else 0
            lines.append(
                f"{name:<{self.COL_REGION}} | {region.origin:>#{self.COL_ADDRESS}x} | "
                f"{format_size(region.length):>{self.COL_SIZE}} | "
                f"{format_size(used):>{self.COL_SIZE}} | "
                f"{format_size(analysis.free_bytes(name)):>{self.COL_SIZE}} | "
                f"{percentage:>{self.COL_PERCENT - 1}.1f}%"
            )

    def _add_breakdown(
        self,
        lines: list[str],
        title: str,
        usages: Mapping[str, UsageTotals],
        limit: int | None,
    ) -> None:
        """Add a table of the largest entries of a breakdown.

        Args:
            lines: List of report lines to append the output to.
            title: Column title for the name column.
            usages: Breakdown in first-seen order.
            limit: Maximum number of rows, None for all.
        """
        # sorted() is stable, so equal totals keep first-seen order
        ranked = sorted(usages.values(), key=lambda u: u.total, reverse=True)
        if limit is not None:
            ranked = ranked[:limit]

        lines.append(
            f"{title:<{self.COL_NAME}} | {'Text':>{self.COL_SIZE}} | "
            f"{'Rodata':>{self.COL_SIZE}} | {'Data':>{self.COL_SIZE}} | "
            f"{'Bss':>{self.COL_SIZE}} | {'Total':>{self.COL_SIZE}}"
        )
        lines.append(self._make_separator_line(*self.BREAKDOWN_COLUMNS))
        for usage in ranked:
            name = usage.name
            if len(name) > self.COL_NAME:
                name = f"...{name[-(self.COL_NAME - 3) :]}"
            lines.append(
                f"{name:<{self.COL_NAME}} | {format_size(usage.text_size):>{self.COL_SIZE}} | "
                f"{format_size(usage.rodata_size):>{self.COL_SIZE}} | "
                f"{format_size(usage.data_size):>{self.COL_SIZE}} | "
                f"{format_size(usage.bss_size):>{self.COL_SIZE}} | "
                f"{format_size(usage.total):>{self.COL_SIZE}}"
            )
        if limit is not None and len(usages) > limit:
            lines.append(f"... and {len(usages) - limit} more")

    def generate_report(
        self,
        analysis: MapAnalysis,
        archives: bool = False,
        files: bool = False,
        limit: int | None = 20,
    ) -> str:
        """Generate a formatted memory report."""
        lines: list[str] = []

        lines.append("=" * self.TABLE_WIDTH)
        lines.append("Memory Region Usage".center(self.TABLE_WIDTH))
        lines.append("=" * self.TABLE_WIDTH)
        lines.append("")

        if analysis.regions:
            self._add_region_table(lines, analysis)
        else:
            lines.append("No memory regions found.")

        for name, usage in analysis.region_usage.items():
            if usage.total == 0:
                continue
            lines.append("")
            lines.append(f"{name}:")
            lines.append(f"  .text:   {format_size(usage.text_size)}")
            lines.append(f"  .rodata: {format_size(usage.rodata_size)}")
            lines.append(f"  .data:   {format_size(usage.data_size)}")
            lines.append(f"  .bss:    {format_size(usage.bss_size)}")
            if usage.other_size:
                lines.append(f"  other:   {format_size(usage.other_size)}")

        unclassified = analysis.unclassified
        if unclassified.symbol_count:
            lines.append("")
            lines.append(
                f"Outside all regions: {format_size(unclassified.total)} "
                f"in {unclassified.symbol_count:,} entries"
            )
        if analysis.malformed_region_lines:
            lines.append(
                f"Skipped {analysis.malformed_region_lines} malformed memory configuration line(s)"
            )

        if archives:
            self._add_section_header(lines, "Per-archive contributions")
            self._add_breakdown(lines, "Archive", analysis.archives, limit)

        if files:
            self._add_section_header(lines, "Per-object file contributions")
            self._add_breakdown(lines, "Object file", analysis.object_files, limit)

        lines.append("")
        lines.append(
            f"Total: {analysis.symbol_count:,} entries, "
            f"{format_size(analysis.matched_bytes)} from {analysis.lines_read:,} lines"
        )
        lines.append("=" * self.TABLE_WIDTH)

        return "\n".join(lines)

