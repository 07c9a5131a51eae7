"""Line pre-filtering and classification for map file analysis."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import lru_cache
import re

from mapsize.core import MalformedRegionLine
from mapsize.helpers import path_basename

from .const import (
    HEX_NUMBER_PATTERN,
    OBJECT_FILE_SUFFIXES,
    OUTPUT_SECTION_PATTERN,
    REGION_PATTERN,
    SECTION_CONTINUATION_PATTERN,
    SECTION_MAPPING,
    SECTION_NAME_CACHE_SIZE,
    SECTION_OTHER,
    SYMBOL_PATTERN_TEMPLATE,
)
from .models import MemoryRegion, SymbolRecord


def build_prefilter(object_suffixes: Iterable[str]) -> Callable[[str], bool]:
    """Build the cheap "maybe a symbol line" test for the given suffixes.

    A line passes when, after trailing whitespace is stripped, it ends in
    an object file suffix optionally followed by ``)``. Every line the
    symbol pattern accepts passes, many lines it rejects pass too.
    """
    suffixes = tuple(object_suffixes)
    endings = suffixes + tuple(f"{suffix})" for suffix in suffixes)

    def maybe_symbol_line(line: str) -> bool:
        return line.rstrip().endswith(endings)

    return maybe_symbol_line


def compile_symbol_pattern(object_suffixes: Iterable[str]) -> re.Pattern[str]:
    """Compile the single symbol rule with an optional archive group."""
    # Longest first so ".obj" is not cut short by ".o"
    ordered = sorted(set(object_suffixes), key=len, reverse=True)
    alternation = "|".join(re.escape(suffix) for suffix in ordered)
    return re.compile(SYMBOL_PATTERN_TEMPLATE.format(suffixes=alternation))


maybe_symbol_line = build_prefilter(OBJECT_FILE_SUFFIXES)


@lru_cache(maxsize=SECTION_NAME_CACHE_SIZE)
def map_section_name(raw_section: str) -> str:
    """Map raw section name to a section kind.

    Args:
        raw_section: Section name from the map file (e.g., ".iram0.text",
            ".dram0.bss", ".flash.rodata")

    Returns:
        Section kind (".text", ".rodata", ".data", ".bss") or "other"
    """
    for section_kind, patterns in SECTION_MAPPING.items():
        if any(pattern in raw_section for pattern in patterns):
            return section_kind
    return SECTION_OTHER


def parse_region_line(line: str) -> MemoryRegion | None:
    """Parse a memory configuration line.

    Example: ``iram0_0_seg      0x0000000040080000 0x0000000000020000 xr``

    Raises:
        MalformedRegionLine: The line is shaped like a region but its
            origin or length is not valid hex.
    """
    if not (match := REGION_PATTERN.match(line)):
        return None
    origin, length = match.group("origin", "length")
    # int(x, 16) would also take "_" separators
    if not (
        HEX_NUMBER_PATTERN.fullmatch(origin) and HEX_NUMBER_PATTERN.fullmatch(length)
    ):
        raise MalformedRegionLine(
            f"Invalid origin or length in memory configuration line: {line.strip()!r}"
        )
    return MemoryRegion(
        match.group("name"),
        int(origin, 16),
        int(length, 16),
        match.group("attributes") or "",
    )


def parse_output_section(line: str) -> tuple[str, int | None, int | None] | None:
    """Parse an output section boundary line.

    Returns:
        Tuple of (name, address, size). Address and size are None when the
        linker wrapped them onto the next line.
    """
    if not (match := OUTPUT_SECTION_PATTERN.match(line)):
        return None
    if (address := match.group("address")) is None:
        return match.group("name"), None, None
    return match.group("name"), int(address, 16), int(match.group("size"), 16)


def parse_section_continuation(line: str) -> tuple[int, int] | None:
    """Parse the address/size line following a wrapped output section name."""
    if not (match := SECTION_CONTINUATION_PATTERN.match(line)):
        return None
    return int(match.group("address"), 16), int(match.group("size"), 16)


class LineClassifier:
    """Pre-filter and symbol rule compiled for one set of object suffixes."""

    def __init__(self, object_suffixes: Iterable[str] = OBJECT_FILE_SUFFIXES) -> None:
        suffixes = tuple(object_suffixes)
        self.object_suffixes = suffixes
        self.maybe_symbol_line = build_prefilter(suffixes)
        self._symbol_match = compile_symbol_pattern(suffixes).match

    def classify_symbol(self, line: str, section: str = "") -> SymbolRecord | None:
        """Match a symbol line in one attempt.

        Returns None for lines the rule does not accept; callers treat those
        as noise.
        """
        if not (match := self._symbol_match(line)):
            return None
        archive = match.group("archive")
        return SymbolRecord(
            symbol_name=match.group("symbol") or "",
            address=int(match.group("address"), 16),
            size=int(match.group("size"), 16),
            archive_name=path_basename(archive) if archive is not None else None,
            object_file=path_basename(match.group("object")),
            section=section,
        )
