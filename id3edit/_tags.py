# Copyright (C) 2016  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import struct
import warnings

from ._frames import (
    TEXT_FIELDS,
    get_layout,
    lyrics_content,
    picture_content,
    read_lyrics,
    read_picture,
    read_text,
    text_content,
    unpack_content,
)
from ._specs import Artwork, ImageFormat, Version
from ._util import (
    HEADER_SIZE,
    MAX_TAG_SIZE,
    ID3NoHeaderError,
    ID3Warning,
    MalformedFrameError,
    TagSizeOverflowError,
    decode_plain,
    decode_synchsafe,
    encode_synchsafe,
    unsynch_decode,
)


def _strip_padding(name, value):
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError("%s has to be str, not %s" % (
            name, type(value).__name__))
    return value.strip("\x00")


def _text_property(name, doc):
    attr = "_" + name

    def getter(self):
        return getattr(self, attr)

    def setter(self, value):
        setattr(self, attr, _strip_padding(name, value))

    return property(getter, setter, doc=doc)


class ID3Tag(object):
    """ID3Tag(version=Version.V3)

    The fields of an ID3v2.2 or ID3v2.3 tag id3edit can read and write.

    Text fields are empty strings when absent. NUL characters at either
    end of assigned text are removed, the frame encoding adds them back
    where the format wants them.

    Arguments:
        version (Version): the version the tag was read as and will be
            written as

    Attributes:
        artist (str): lead artist (TPE1/TP1)
        title (str): song title (TIT2/TT2)
        album (str): album title (TALB/TAL)
        lyrics (str): unsynchronised lyrics (USLT/ULT)
        artwork (Artwork): cover art (APIC/PIC) or `None`
    """

    __module__ = "id3edit"

    artist = _text_property("artist", "Lead artist")
    title = _text_property("title", "Song title")
    album = _text_property("album", "Album title")
    lyrics = _text_property("lyrics", "Unsynchronised lyrics")

    def __init__(self, version: Version = Version.V3):
        self._version = Version(version)
        self.clear()

    @property
    def version(self) -> Version:
        return self._version

    @property
    def artwork(self) -> Artwork | None:
        return self._artwork

    @artwork.setter
    def artwork(self, value):
        if value is None:
            self._artwork = None
        else:
            self.set_artwork(*value)

    def set_artwork(self, data: bytes, format) -> None:
        """Set already encoded PNG or JPEG image data.

        Args:
            data (bytes): the image
            format (ImageFormat): `ImageFormat` or its name
        """

        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("artwork has to be bytes, not %s" %
                            type(data).__name__)
        if isinstance(format, str):
            try:
                format = ImageFormat[format.upper()]
            except KeyError:
                raise ValueError("unknown image format %r" % format)
        self._artwork = Artwork(bytes(data), ImageFormat(format))

    def clear(self) -> None:
        """Remove all fields, keeping the version"""

        self._artist = ""
        self._title = ""
        self._album = ""
        self._lyrics = ""
        self._artwork = None

    def is_empty(self) -> bool:
        return not (self.artist or self.title or self.album or
                    self.lyrics or self.artwork is not None)

    def _values(self):
        return (self.version, self.artist, self.title, self.album,
                self.lyrics, self.artwork)

    def __eq__(self, other):
        if not isinstance(other, ID3Tag):
            return NotImplemented
        return self._values() == other._values()

    __hash__ = None

    def __repr__(self):
        return "<%s version=%s artist=%r title=%r album=%r>" % (
            type(self).__name__, self.version.name, self.artist,
            self.title, self.album)

    def pprint(self) -> str:
        """Returns:
            text: tag information in a human readable form
        """

        lines = ["ID3v2.%d" % self.version]
        for name in TEXT_FIELDS + ("lyrics",):
            value = getattr(self, name)
            if value:
                lines.append("%s=%s" % (name, value))
        if self.artwork is not None:
            lines.append("artwork=%s (%d bytes)" % (
                self.artwork.format.name, len(self.artwork.data)))
        return "\n".join(lines)


class ID3Header(object):
    """ID3Header(data)

    The 10 byte header in front of an ID3v2 tag.

    Raises:
        ID3NoHeaderError: if `data` doesn't start with an ID3v2 header
    """

    def __init__(self, data: bytes):
        if len(data) < HEADER_SIZE:
            raise ID3NoHeaderError(
                "%d bytes are too short for an ID3 header" % len(data))

        id3, major, revision, flags, size = struct.unpack(
            '>3sBBB4s', data[:HEADER_SIZE])
        if id3 != b'ID3':
            raise ID3NoHeaderError("data doesn't start with an ID3 tag")

        self.major = major
        self.revision = revision
        self.flags = flags
        # excludes the header itself
        self.size = decode_synchsafe(size)
        self.version = Version.detect(data)

    f_unsynch = property(lambda s: bool(s.flags & 0x80))
    f_extended = property(lambda s: bool(s.flags & 0x40))

    def __repr__(self):
        return "<%s ID3v2.%d.%d size=%d>" % (
            type(self).__name__, self.major, self.revision, self.size)


def find_header(data: bytes) -> ID3Header | None:
    """The ID3v2 header at the start of `data`, None if there is none"""

    try:
        return ID3Header(data)
    except ID3NoHeaderError:
        return None


def _extract(tag, layout, name, content):
    if name in TEXT_FIELDS:
        setattr(tag, name, read_text(content))
    elif name == "lyrics":
        tag.lyrics = read_lyrics(content)
    else:
        artwork = read_picture(layout, content)
        if artwork is not None:
            tag.artwork = artwork


def scan(data: bytes, version: Version = Version.V3) -> ID3Tag:
    """Read the frames of a tag.

    Args:
        data (bytes): the tag content following the tag header
        version (Version): the version selecting the frame layout

    Returns:
        ID3Tag: the supported fields found. Unknown and encrypted frames
        are skipped, compressed ID3v2.3 frames are decompressed.

    Raises:
        MalformedFrameError: if a frame runs past the end of `data`
    """

    layout = get_layout(version)
    fields = layout.fields
    tag = ID3Tag(layout.version)

    offset = 0
    while offset < len(data):
        # three zero bytes where a frame ID should be mark padding
        if not data[offset:offset + 3].strip(b"\x00"):
            break

        header = layout.read_header(data, offset)
        start = offset + header.offset
        end = start + header.size
        if end > len(data):
            raise MalformedFrameError(
                "%r frame at %d declares %d bytes, only %d left" % (
                    header.frame_id, offset, header.size, len(data) - start))

        name = fields.get(header.frame_id)
        if name is not None and header.size:
            content = unpack_content(header, data[start:end])
            if content is not None:
                _extract(tag, layout, name, content)
        offset = end

    return tag


def read_tag(data: bytes):
    """Read the ID3v2 tag at the start of `data`.

    Returns:
        tuple(ID3Tag, ID3Header): the tag and its header. Without a tag
        the result is an empty tag of the version selected by byte 3
        (see `Version.detect`) and `None`.

    Raises:
        MalformedFrameError: if the tag structure is broken
    """

    header = find_header(data)
    if header is None:
        return ID3Tag(Version.detect(data)), None

    if header.major not in (Version.V2, Version.V3):
        warnings.warn(
            "ID3v2.%d tag read as ID3v2.3" % header.major, ID3Warning)

    region = data[HEADER_SIZE:HEADER_SIZE + header.size]
    if header.f_unsynch:
        try:
            region = unsynch_decode(region)
        except ValueError:
            pass

    if header.version is Version.V3 and header.f_extended:
        if len(region) < 4:
            raise MalformedFrameError("extended header doesn't fit")
        extsize = decode_plain(region[:4], 4)
        if 4 + extsize > len(region):
            raise MalformedFrameError(
                "extended header of %d bytes runs past the tag" % extsize)
        region = region[4 + extsize:]

    return scan(region, header.version), header


def build(tag: ID3Tag) -> bytes:
    """Serialize `tag` including the tag header.

    Frames are written in the order artist, title, album, lyrics,
    artwork, using the version of the tag.

    Returns:
        bytes: the tag or empty bytes if no field is set

    Raises:
        TagSizeOverflowError: if the frames don't fit in a tag
        TagEncodingError: if text can't be encoded as Latin-1
    """

    layout = get_layout(tag.version)

    frames = []
    for name in TEXT_FIELDS:
        value = getattr(tag, name)
        if value:
            frames.append(
                layout.write_frame(layout.frame_id(name), text_content(value)))

    if tag.lyrics:
        frames.append(
            layout.write_frame(layout.LYRICS, lyrics_content(tag.lyrics)))

    if tag.artwork is not None:
        frames.append(layout.write_frame(
            layout.ARTWORK, picture_content(layout, tag.artwork)))

    content = b"".join(frames)
    if not content:
        return b""

    if len(content) > MAX_TAG_SIZE:
        raise TagSizeOverflowError(
            "tag content of %d bytes exceeds the %d byte limit" % (
                len(content), MAX_TAG_SIZE))

    header = struct.pack(
        '>3sBBB4s', b'ID3', layout.version, 0, 0,
        encode_synchsafe(len(content)))
    return header + content
