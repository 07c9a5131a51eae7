"""State machine over the top-level parts of a map file."""

from __future__ import annotations

from enum import StrEnum
import logging

from .const import MEMORY_CONFIG_MARKER, MEMORY_MAP_MARKER, TRAILER_MARKER

_LOGGER = logging.getLogger(__name__)


class ScanState(StrEnum):
    PREAMBLE = "preamble"
    MEMORY_CONFIG = "memory_config"
    SYMBOL_TABLE = "symbol_table"
    TRAILER = "trailer"


class RegionTracker:
    """Decide for each line whether it is in scope for classification.

    Lines before the memory configuration heading are preamble (archive
    member lists, discarded sections) and are skipped. The trailer heading
    ends the scan. Passing ``trailer_marker=None`` disables the early exit
    and keeps the symbol table open until the end of the stream.
    """

    def __init__(
        self,
        memory_config_marker: str = MEMORY_CONFIG_MARKER,
        memory_map_marker: str = MEMORY_MAP_MARKER,
        trailer_marker: str | None = TRAILER_MARKER,
    ) -> None:
        self.memory_config_marker = memory_config_marker
        self.memory_map_marker = memory_map_marker
        self.trailer_marker = trailer_marker
        self.state = ScanState.PREAMBLE
        self.line_number = 0

    @property
    def finished(self) -> bool:
        return self.state is ScanState.TRAILER

    def _enter(self, state: ScanState) -> None:
        _LOGGER.debug(
            "Line %d: %s -> %s", self.line_number, self.state.value, state.value
        )
        self.state = state

    def feed(self, line: str) -> bool:
        """Advance on heading lines and report whether ``line`` is in scope.

        Heading lines themselves are never in scope.
        """
        self.line_number += 1
        state = self.state
        # Most lines of a map file sit in the symbol table, test it first
        if state is ScanState.SYMBOL_TABLE:
            if self.trailer_marker is not None and line.startswith(
                self.trailer_marker
            ):
                self._enter(ScanState.TRAILER)
                return False
            return True
        if state is ScanState.MEMORY_CONFIG:
            if line.startswith(self.memory_map_marker):
                self._enter(ScanState.SYMBOL_TABLE)
                return False
            return True
        if state is ScanState.PREAMBLE:
            if line.startswith(self.memory_config_marker):
                self._enter(ScanState.MEMORY_CONFIG)
            elif line.startswith(self.memory_map_marker):
                # No memory configuration block in this map
                self._enter(ScanState.SYMBOL_TABLE)
        return False
