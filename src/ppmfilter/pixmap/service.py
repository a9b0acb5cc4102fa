"""Module for reading and writing raw binary pixmaps (P6)."""

import logging
from pathlib import Path
from typing import Union

from ppmfilter.pixmap.errors import (
    FileOpenError,
    FormatError,
    HeaderError,
    TruncatedDataError,
    UnsupportedMaxValueError,
    WriteError,
)
from ppmfilter.pixmap.image import CHANNELS, MAX_VALUE, Image

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

MAGIC = b"P6"
WHITESPACE = b" \t\n\r\v\f"


class _HeaderReader:
    """Cursor over the raw file contents used to parse the ASCII header."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def skip_whitespace(self) -> None:
        while self.pos < len(self.data) and self.data[self.pos] in WHITESPACE:
            self.pos += 1

    def skip_whitespace_and_comments(self) -> None:
        while True:
            self.skip_whitespace()
            if self.pos < len(self.data) and self.data[self.pos] == ord("#"):
                end = self.data.find(b"\n", self.pos)
                self.pos = len(self.data) if end == -1 else end + 1
                continue
            return

    def read_magic(self) -> bytes:
        self.skip_whitespace()
        start = self.pos
        while self.pos < len(self.data) and self.pos - start < 2 and self.data[self.pos] not in WHITESPACE:
            self.pos += 1
        return self.data[start:self.pos]

    def read_int(self) -> int:
        self.skip_whitespace_and_comments()
        start = self.pos
        if self.pos < len(self.data) and self.data[self.pos] in b"+-":
            self.pos += 1
        digits = self.pos
        while self.pos < len(self.data) and self.data[self.pos] in b"0123456789":
            self.pos += 1
        if self.pos == digits:
            raise ValueError(f"expected an integer at byte {start}")
        return int(self.data[start:self.pos])

    def read_separator(self) -> None:
        self.pos += 1

    def read_pixels(self, count: int) -> bytes:
        return self.data[self.pos:self.pos + count]


class Pixmap:
    """Codec for the raw binary RGB pixmap format."""

    @classmethod
    def decode(cls, path: PathLike) -> Image:
        """Load an image from the given path.

        Args:
            path (PathLike): Path to the P6 file.

        Returns:
            Image: Image with the parsed dimensions and byte-exact pixels.

        Raises:
            FileOpenError: The file cannot be opened.
            FormatError: The magic token is not P6.
            HeaderError: Width, height and max value cannot be parsed.
            UnsupportedMaxValueError: The max value is not 255.
            TruncatedDataError: Fewer pixel bytes than the header announces.
        """
        path = Path(path)
        try:
            with open(path, "rb") as fh:
                data = fh.read()
        except OSError as err:
            raise FileOpenError(f"Cannot open {path} for reading: {err}") from err

        reader = _HeaderReader(data)
        magic = reader.read_magic()
        if magic != MAGIC:
            raise FormatError(f"{path}: unsupported format {magic!r}, expected {MAGIC!r}")

        try:
            width = reader.read_int()
            height = reader.read_int()
            max_value = reader.read_int()
        except ValueError as err:
            raise HeaderError(f"{path}: invalid header, {err}") from err

        if max_value != MAX_VALUE:
            raise UnsupportedMaxValueError(f"{path}: max value {max_value} is not supported, only {MAX_VALUE}")
        if width <= 0 or height <= 0:
            raise HeaderError(f"{path}: invalid dimensions {width}x{height}")

        reader.read_separator()
        expected = CHANNELS * width * height
        pixels = reader.read_pixels(expected)
        if len(pixels) != expected:
            raise TruncatedDataError(f"{path}: incomplete pixel data, read {len(pixels)} of {expected} bytes")

        logger.debug("Decoded %s (%dx%d)", path, width, height)
        return Image.from_bytes(pixels, width, height)

    @classmethod
    def encode(cls, image: Image, path: PathLike) -> None:
        """Write the image to the given path.

        Args:
            image (Image): Image to save.
            path (PathLike): Destination file, created or truncated.

        Raises:
            FileOpenError: The file cannot be opened for writing.
            WriteError: Writing or flushing the data failed.
        """
        path = Path(path)
        header = b"%s\n%d\n%d\n%d\n" % (MAGIC, image.width, image.height, MAX_VALUE)
        payload = header + image.to_bytes()
        try:
            fh = open(path, "wb")
        except OSError as err:
            raise FileOpenError(f"Cannot open {path} for writing: {err}") from err
        try:
            with fh:
                fh.write(payload)
        except OSError as err:
            raise WriteError(f"Cannot write {path}: {err}") from err
        logger.debug("Encoded %s (%dx%d)", path, image.width, image.height)


def decode(path: PathLike) -> Image:
    return Pixmap.decode(path)


def encode(image: Image, path: PathLike) -> None:
    Pixmap.encode(image, path)
