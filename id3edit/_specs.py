# Copyright (C) 2016  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple


class Version(IntEnum):
    """ID3v2 major version a tag is read or written as"""

    V2 = 2
    """ID3v2.2, three character frame IDs"""

    V3 = 3
    """ID3v2.3, four character frame IDs"""

    @classmethod
    def detect(cls, data: bytes) -> Version:
        """The version selected by byte 3 of `data`.

        Anything other than 2 or 3, or less than 4 bytes of data,
        selects V3.
        """

        if len(data) < 4 or data[3] not in (cls.V2, cls.V3):
            return cls.V3
        return cls(data[3])


class Encoding(IntEnum):
    """Text Encoding"""

    LATIN1 = 0
    """ISO-8859-1"""

    UTF16 = 1
    """UTF-16 with BOM"""

    UTF16BE = 2
    """UTF-16BE without BOM"""

    UTF8 = 3
    """UTF-8"""

    @property
    def codec(self) -> str:
        return _CODECS[self]

    @property
    def is_wide(self) -> bool:
        return self in (Encoding.UTF16, Encoding.UTF16BE)


_CODECS = {
    Encoding.LATIN1: "latin1",
    Encoding.UTF16: "utf16",
    Encoding.UTF16BE: "utf_16_be",
    Encoding.UTF8: "utf8",
}


class PictureType(IntEnum):
    """Picture types written to artwork frames"""

    OTHER = 0
    """Other"""

    COVER_FRONT = 3
    """Cover (front)"""


class ImageFormat(IntEnum):
    """Image formats artwork can be stored in"""

    PNG = 0
    JPEG = 1

    @property
    def code(self) -> bytes:
        """Three letter format used by ID3v2.2 PIC frames"""

        return b"PNG" if self is ImageFormat.PNG else b"JPG"

    @property
    def mime(self) -> bytes:
        """MIME type used by ID3v2.3 APIC frames"""

        return b"image/png" if self is ImageFormat.PNG else b"image/jpeg"

    @property
    def signature(self) -> bytes:
        """Bytes every image of this format starts with"""

        return b"\x89PNG" if self is ImageFormat.PNG else b"\xff\xd8\xff"

    @classmethod
    def from_declared(cls, value: bytes) -> ImageFormat | None:
        """The format named by a PIC format code or an APIC MIME type"""

        value = value.strip().lower()
        if value in (b"png", b"image/png"):
            return cls.PNG
        elif value in (b"jpg", b"jpeg", b"image/jpeg", b"image/jpg"):
            return cls.JPEG
        return None


class Artwork(NamedTuple):
    """Embedded cover art: already encoded image bytes and their format"""

    data: bytes
    format: ImageFormat
