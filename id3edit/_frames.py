# Copyright (C) 2016  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Frame layouts and the frames id3edit understands.

ID3v2.2 and ID3v2.3 differ in the width of frame IDs and sizes, the
presence of frame flags and how artwork declares its format. Each
version is described by one :class:`FrameLayout`, selected once with
:func:`get_layout` and then used for reading and writing all frames of
a tag.
"""

from __future__ import annotations

import zlib
from typing import NamedTuple

from ._specs import Artwork, Encoding, ImageFormat, PictureType, Version
from ._util import (
    MalformedFrameError,
    TagEncodingError,
    decode_plain,
    encode_plain,
    split_terminated,
)


JPEG_MARKER = b"\xff\xd8\xff\xe0"
PNG_SIGNATURE = b"\x89PNG"

LYRICS_PREFIX = b"\x00eng\x00"
"""Latin-1 encoding, English, empty content descriptor"""

TEXT_FIELDS = ("artist", "title", "album")

# ID3v2.3 frame flags changing how the content is stored
FLAG_ENCRYPT = 0x0040
FLAG_COMPRESS = 0x0080


class FrameHeader(NamedTuple):
    """A frame header as found while scanning a tag"""

    frame_id: bytes
    size: int
    """declared content size, excluding the header"""
    offset: int
    """where the content starts, relative to the frame"""
    flags: int = 0


class FrameLayout(object):
    """Frame IDs and binary layout of one ID3v2 version"""

    version: Version
    ID_LENGTH: int
    SIZE_WIDTH: int
    FLAGS: bytes

    ARTIST: bytes
    TITLE: bytes
    ALBUM: bytes
    LYRICS: bytes
    ARTWORK: bytes

    @property
    def HEADER_SIZE(self) -> int:
        return self.ID_LENGTH + self.SIZE_WIDTH + len(self.FLAGS)

    @property
    def fields(self) -> dict[bytes, str]:
        """Maps the supported frame IDs to ID3Tag attribute names"""

        return {
            self.ARTIST: "artist",
            self.TITLE: "title",
            self.ALBUM: "album",
            self.LYRICS: "lyrics",
            self.ARTWORK: "artwork",
        }

    def frame_id(self, field: str) -> bytes:
        return getattr(self, field.upper())

    def read_header(self, data: bytes, offset: int) -> FrameHeader:
        """Read the frame header at `offset`.

        Raises:
            MalformedFrameError: if the header doesn't fit into `data`
        """

        if offset + self.HEADER_SIZE > len(data):
            raise MalformedFrameError(
                "frame header at %d runs past the end of the tag" % offset)

        start = offset + self.ID_LENGTH
        size = decode_plain(
            data[start:start + self.SIZE_WIDTH], self.SIZE_WIDTH)
        flags = int.from_bytes(
            data[start + self.SIZE_WIDTH:offset + self.HEADER_SIZE], "big")
        return FrameHeader(
            data[offset:start], size, self.HEADER_SIZE, flags)

    def write_frame(self, frame_id: bytes, content: bytes) -> bytes:
        size = encode_plain(len(content), self.SIZE_WIDTH)
        return frame_id + size + self.FLAGS + content

    def picture_header(self, format: ImageFormat) -> bytes:
        """Everything in an artwork frame in front of the image data"""

        raise NotImplementedError

    def split_picture(self, content: bytes):
        """Walk the declared fields of an artwork frame.

        Returns:
            tuple(ImageFormat or None, bytes) or None: the declared image
            format and the data following the description, None if the
            fields can't be walked
        """

        raise NotImplementedError

    def __repr__(self):
        return "<%s version=%d>" % (type(self).__name__, self.version)


class V22Layout(FrameLayout):

    version = Version.V2
    ID_LENGTH = 3
    SIZE_WIDTH = 3
    FLAGS = b""

    ARTIST = b"TP1"
    TITLE = b"TT2"
    ALBUM = b"TAL"
    LYRICS = b"ULT"
    ARTWORK = b"PIC"

    def picture_header(self, format):
        return (bytes([Encoding.LATIN1]) + format.code +
                bytes([PictureType.OTHER]) + b"\x00")

    def split_picture(self, content):
        if len(content) < 5:
            return None
        encoding = get_encoding(content[0])
        format = ImageFormat.from_declared(content[1:4])
        parts = split_terminated(content[5:], encoding.is_wide)
        if parts is None:
            return None
        return format, parts[1]


class V23Layout(FrameLayout):

    version = Version.V3
    ID_LENGTH = 4
    SIZE_WIDTH = 4
    FLAGS = b"\x00\x00"

    ARTIST = b"TPE1"
    TITLE = b"TIT2"
    ALBUM = b"TALB"
    LYRICS = b"USLT"
    ARTWORK = b"APIC"

    def picture_header(self, format):
        return (bytes([Encoding.LATIN1]) + format.mime + b"\x00" +
                bytes([PictureType.COVER_FRONT]) + b"\x00")

    def split_picture(self, content):
        if not content:
            return None
        encoding = get_encoding(content[0])
        parts = split_terminated(content[1:])
        if parts is None or not parts[1]:
            return None
        mime, rest = parts
        parts = split_terminated(rest[1:], encoding.is_wide)
        if parts is None:
            return None
        return ImageFormat.from_declared(mime), parts[1]


_LAYOUTS = {
    Version.V2: V22Layout(),
    Version.V3: V23Layout(),
}


def get_layout(version) -> FrameLayout:
    """The layout for `version`, a Version or its number"""

    return _LAYOUTS[Version(version)]


def get_encoding(value: int) -> Encoding:
    """The encoding for an encoding byte, Latin-1 if it is unknown"""

    try:
        return Encoding(value)
    except ValueError:
        return Encoding.LATIN1


def decode_text(data: bytes, encoding: Encoding) -> str:
    return data.decode(encoding.codec, "replace")


def encode_text(value: str) -> bytes:
    try:
        return value.encode("latin1")
    except UnicodeEncodeError as e:
        raise TagEncodingError(e) from e


def unpack_content(header: FrameHeader, content: bytes) -> bytes | None:
    """The content of a frame with compression undone.

    Returns None for encrypted frames and compressed frames that don't
    decompress, those get skipped like unknown frames.
    """

    if header.flags & FLAG_ENCRYPT:
        return None
    if header.flags & FLAG_COMPRESS:
        # 4 byte decompressed size in front of the zlib stream
        if len(content) < 4:
            return None
        try:
            return zlib.decompress(content[4:])
        except zlib.error:
            return None
    return content


def read_text(content: bytes) -> str:
    """The text of an artist, title or album frame"""

    if not content:
        return ""
    return decode_text(content[1:], get_encoding(content[0]))


def read_lyrics(content: bytes) -> str:
    """The lyrics of a lyrics frame, skipping language and descriptor"""

    if not content:
        return ""
    encoding = get_encoding(content[0])
    parts = split_terminated(content[4:], encoding.is_wide)
    if parts is None:
        text = content[len(LYRICS_PREFIX):]
    else:
        text = parts[1]
    return decode_text(text, encoding)


def sniff_picture(content: bytes) -> Artwork | None:
    """Find the first JPEG or PNG image start in `content`"""

    found = None
    for format, magic in ((ImageFormat.JPEG, JPEG_MARKER),
                          (ImageFormat.PNG, PNG_SIGNATURE)):
        index = content.find(magic)
        if index != -1 and (found is None or index < found[0]):
            found = (index, format)

    if found is None:
        return None
    index, format = found
    return Artwork(content[index:], format)


def read_picture(layout: FrameLayout, content: bytes) -> Artwork | None:
    """The image of an artwork frame or None if it holds no PNG/JPEG.

    The declared fields are trusted only if the data after them starts
    like an image of the declared format, otherwise the content is
    searched for an image start.
    """

    parts = layout.split_picture(content)
    if parts is not None:
        format, data = parts
        if format is not None and data.startswith(format.signature):
            return Artwork(data, format)
    return sniff_picture(content)


def text_content(value: str) -> bytes:
    content = encode_text(value)
    if content[:1] != b"\x00":
        content = b"\x00" + content
    if content[-1:] != b"\x00":
        content += b"\x00"
    return content


def lyrics_content(value: str) -> bytes:
    return LYRICS_PREFIX + encode_text(value)


def picture_content(layout: FrameLayout, artwork: Artwork) -> bytes:
    return layout.picture_header(artwork.format) + bytes(artwork.data)
