"""Constants for linker map line classification."""

import re

# GNU ld section headings. The region tracker switches state on lines
# starting with these literals.
MEMORY_CONFIG_MARKER = "Memory Configuration"
MEMORY_MAP_MARKER = "Linker script and memory map"
TRAILER_MARKER = "Cross Reference Table"

# Object file suffixes accepted at the end of a symbol line
OBJECT_FILE_SUFFIXES = (".o", ".obj")

# Pseudo-regions that span the whole address space and would swallow
# every symbol if registered
IGNORED_REGIONS = frozenset(["*default*"])

# Memory configuration line: name origin length [attributes [!negated]]
# Numeric fields are matched loosely so that bad hex is reported as a
# malformed line instead of silently falling through.
REGION_PATTERN = re.compile(
    r"^(?P<name>\S+)[ \t]+(?P<origin>0[xX]\S+)[ \t]+(?P<length>0[xX]\S+)"
    r"(?:[ \t]+(?P<attributes>\S+(?:[ \t]+!\S+)?))?\s*$"
)
HEX_NUMBER_PATTERN = re.compile(r"0[xX][0-9a-fA-F]+")

# Output section boundary: ".iram0.text     0x40080000     0x1f2c4"
# The address and size move to the following line when the name is long.
OUTPUT_SECTION_PATTERN = re.compile(
    r"^(?P<name>\.\S+)"
    r"(?:[ \t]+(?P<address>0x[0-9a-fA-F]+)[ \t]+(?P<size>0x[0-9a-fA-F]+)"
    r"(?:[ \t]+load address 0x[0-9a-fA-F]+)?)?\s*$"
)
SECTION_CONTINUATION_PATTERN = re.compile(
    r"^[ \t]+(?P<address>0x[0-9a-fA-F]+)[ \t]+(?P<size>0x[0-9a-fA-F]+)"
    r"(?:[ \t]+load address 0x[0-9a-fA-F]+)?\s*$"
)

# Symbol line, archive optional:
#   " .iram1.5  0x40080000  0x30 /x/libfreertos.a(port.o)"
#   "main 0x40080010 0x100 main.c.obj"
# The object suffix alternation is filled in from the configured suffixes.
SYMBOL_PATTERN_TEMPLATE = (
    r"^[ \t]*(?:(?P<symbol>(?!0x)\S+)[ \t]+)?"
    r"(?P<address>0x[0-9a-fA-F]+)[ \t]+(?P<size>0x[0-9a-fA-F]+)[ \t]+"
    r"(?:(?P<archive>[^\s(]+\.a)\()?"
    r"(?P<object>[^\s()]+(?:{suffixes}))\)?\s*$"
)

# Section mapping for map file section names
# Note: Order matters! .bss must come before .data so ".dram0.bss" is not
# counted as data, and .rodata must come before .data for ".flash.rodata".
SECTION_MAPPING = {
    ".bss": (".bss", ".noinit", "COMMON"),
    ".rodata": (".rodata", ".drom", ".appdesc"),
    ".text": (".text", ".iram", ".literal", ".vectors", ".opcodes"),
    ".data": (".data", ".dram"),
}
SECTION_OTHER = "other"

# Output section names repeat, input section names mostly do not
SECTION_NAME_CACHE_SIZE = 512
