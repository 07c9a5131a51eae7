"""Builders for small synthetic map files."""


def make_map(
    regions: list[str] | None = None,
    body: list[str] | None = None,
    trailer: list[str] | None = None,
) -> list[str]:
    """Assemble the lines of a minimal map file.

    ``regions`` go in the memory configuration block (omitted when None),
    ``body`` in the memory map and ``trailer`` after the cross reference
    table heading (omitted when None).
    """
    lines = ["Archive member included to satisfy reference by file (symbol)\n", "\n"]
    if regions is not None:
        lines.append("Memory Configuration\n")
        lines.append("\n")
        lines.append("Name             Origin             Length             Attributes\n")
        lines.extend(f"{line}\n" for line in regions)
        lines.append("\n")
    lines.append("Linker script and memory map\n")
    lines.append("\n")
    lines.extend(f"{line}\n" for line in body or [])
    if trailer is not None:
        lines.append("Cross Reference Table\n")
        lines.append("\n")
        lines.extend(f"{line}\n" for line in trailer)
    return lines
