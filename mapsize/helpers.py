import os
from pathlib import PurePath


def get_bool_env(var, default=False):
    value = os.getenv(var, default)
    if isinstance(value, str):
        value = value.lower()
        if value in ["1", "true"]:
            return True
        if value in ["0", "false"]:
            return False
    return bool(value)


def path_basename(path: str) -> str:
    """Return the last component of a path written with either separator.

    Map files produced on Windows hosts keep backslashes even when read
    elsewhere, so ``PurePath`` alone is not enough.
    """
    return PurePath(path.replace("\\", "/")).name


def format_size(size: int) -> str:
    """Format a byte count with thousands separators, e.g. ``131,072 B``."""
    return f"{size:,} B"
