"""
Exceptions raised by the gallery build.
"""


class GalleryError(Exception):
    """Base class for errors that abort a gallery build."""


class ConfigError(GalleryError):
    """The gallery configuration file is missing or invalid."""


class MetadataError(GalleryError):
    """An exported Figma document could not be parsed."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f'Malformed Figma metadata in {path}: {reason}')
