"""Tests for the memory report output."""

from pathlib import Path

from map_lines import make_map
import pytest

from mapsize.analyze_map import MapAnalyzer, analyze_map_file
from mapsize.analyze_map.cli import MapAnalyzerCLI


def render(map_path: Path, **kwargs) -> str:
    return MapAnalyzerCLI().generate_report(analyze_map_file(map_path), **kwargs)


@pytest.fixture
def report(esp32_map: Path) -> str:
    return render(esp32_map, archives=True, files=True)


def test_region_table(report):
    assert "Memory Region Usage" in report
    row = next(line for line in report.splitlines() if line.startswith("iram0_0_seg "))
    assert "0x40080000" in row
    assert "131,072 B" in row
    assert "1,360 B" in row
    assert "129,712 B" in row
    assert "1.0%" in row


def test_region_kind_lines(report):
    assert "dram0_0_seg:" in report
    assert "  .data:   96 B" in report
    assert "  .bss:    136 B" in report
    assert "rtc_slow_seg:" in report
    assert "  other:" not in report


def test_unclassified_and_totals(report):
    assert "Outside all regions: 4,660 B in 2 entries" in report
    assert "Total: 18 entries, 8,620 B from 79 lines" in report
    assert "malformed" not in report


def test_breakdowns_sorted_by_total(report):
    lines = report.splitlines()
    archive_rows = [
        line for line in lines if line.startswith(("libfreertos.a ", "libmain.a "))
    ]

    assert "Per-archive contributions" in report
    assert "Per-object file contributions" in report
    assert archive_rows[0].startswith("libfreertos.a")
    assert archive_rows[1].startswith("libmain.a")

    object_rows = [
        line
        for line in lines
        if line.startswith(("libfreertos.a(", "libmain.a(", "isr."))
    ]
    assert object_rows[0].startswith("libfreertos.a(tasks.c.obj)")
    assert object_rows[-1].startswith("libmain.a(sleep.o)")


def test_breakdowns_hidden_by_default(esp32_map: Path):
    report = render(esp32_map)

    assert "Per-archive contributions" not in report
    assert "Per-object file contributions" not in report


def test_breakdown_limit(esp32_map: Path):
    report = render(esp32_map, files=True, limit=2)

    assert "... and 5 more" in report
    assert "libmain.a(sleep.o)" not in report


def test_long_names_are_truncated():
    name = "a_very_long_component_directory_name_for_testing.c.obj"
    lines = make_map(
        regions=["IRAM 0x40080000 0x20000"],
        body=[f" .iram1.0 0x40080000 0x10 {name}"],
    )
    cli = MapAnalyzerCLI()

    report = cli.generate_report(cli.analyze(lines), files=True)

    assert f"...{name[-(MapAnalyzerCLI.COL_NAME - 3) :]}" in report
    assert name not in report


def test_no_regions():
    analysis = MapAnalyzer().analyze(make_map(body=[" .text 0x10 0x4 main.o"]))

    report = MapAnalyzerCLI().generate_report(analysis)

    assert "No memory regions found." in report
    assert "Outside all regions: 4 B in 1 entries" in report


def test_malformed_lines_reported():
    analysis = MapAnalyzer().analyze(
        make_map(regions=["IRAM 0xZZ 0x20000"], body=[])
    )

    report = MapAnalyzerCLI().generate_report(analysis)

    assert "Skipped 1 malformed memory configuration line(s)" in report
