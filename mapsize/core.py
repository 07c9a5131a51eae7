class MapsizeError(Exception):
    """General mapsize exception occurred."""


class MalformedRegionLine(MapsizeError):
    """A memory configuration line had unparseable origin or length fields."""


class MapReadError(MapsizeError):
    """Reading the map file failed before the scan completed."""


class InvalidSettings(MapsizeError):
    """The analyzer settings file could not be loaded or validated."""
