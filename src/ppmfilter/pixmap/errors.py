"""Errors raised by the pixmap codec."""


class PixmapError(Exception):
    """Base class for every decode/encode failure."""


class FileOpenError(PixmapError):
    """The file could not be opened for reading or writing."""


class FormatError(PixmapError):
    """The magic token is not the raw binary color marker."""


class HeaderError(PixmapError):
    """The numeric header is malformed."""


class UnsupportedMaxValueError(PixmapError):
    """The header declares a max value other than 255."""


class TruncatedDataError(PixmapError):
    """The file ends before all pixel bytes were read."""


class WriteError(PixmapError):
    """The file was opened but the image could not be written."""
