"""Constants used by mapsize."""

__version__ = "1.2.0"

ENV_LOG_LEVEL = "MAPSIZE_LOG_LEVEL"
ENV_VERBOSE = "MAPSIZE_VERBOSE"

CONF_MEMORY_CONFIG_MARKER = "memory_config_marker"
CONF_MEMORY_MAP_MARKER = "memory_map_marker"
CONF_TRAILER_MARKER = "trailer_marker"
CONF_EARLY_EXIT = "early_exit"
CONF_OBJECT_SUFFIXES = "object_suffixes"
CONF_IGNORED_REGIONS = "ignored_regions"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
