"""Exceptions raised while loading a region feature collection."""


class MapLoadError(Exception):
    """Base class for failures that abort a map load."""


class MapIOError(MapLoadError):
    """The map source could not be read."""


class ParseError(MapLoadError):
    """The map source is structurally invalid for an accepted feature."""
