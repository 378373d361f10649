# Copyright (C) 2016  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Utility classes for id3edit.

You should not rely on the interfaces here being stable. They are
intended for internal use in id3edit only.
"""

from __future__ import annotations

import struct


HEADER_SIZE = 10
"""Size of the outer ID3v2 tag header in bytes"""

MAX_TAG_SIZE = 0xFFFFFFF
"""Largest tag content size a synchsafe integer can hold (2**28 - 1)"""


class error(Exception):
    """Base class for all id3edit errors"""


class NotAnMP3Error(error, ValueError):
    pass


class NoDataError(error, ValueError):
    pass


class TagSizeOverflowError(error, OverflowError):
    pass


class MalformedFrameError(error, ValueError):
    pass


class TagEncodingError(error, ValueError):
    pass


class ID3NoHeaderError(error, ValueError):
    pass


class FileDoesNotExistError(error, IOError):
    pass


class NoPathSetError(error, ValueError):
    pass


class ID3Warning(error, UserWarning):
    pass


def encode_synchsafe(size: int) -> bytes:
    """Encode `size` as a 4 byte synchsafe integer.

    Every byte carries 7 bits of the value, the most significant group
    first, with bit 7 always cleared.

    Raises:
        TagSizeOverflowError: if `size` needs more than 28 bits
        ValueError: if `size` is negative
    """

    if size < 0:
        raise ValueError("negative size: %d" % size)
    if size > MAX_TAG_SIZE:
        raise TagSizeOverflowError(
            "tag content of %d bytes exceeds the %d byte limit" % (
                size, MAX_TAG_SIZE))

    bytes_ = bytearray(4)
    index = 0
    while size:
        bytes_[index] = size & 0x7F
        size >>= 7
        index += 1
    bytes_.reverse()
    return bytes(bytes_)


def decode_synchsafe(data: bytes) -> int:
    """Decode a 4 byte synchsafe integer, ignoring bit 7 of each byte"""

    if len(data) != 4:
        raise ValueError("synchsafe integers are 4 bytes, got %d" % len(data))

    value = 0
    for index, byte in enumerate(bytearray(data)):
        value += (byte & 0x7F) << (7 * (3 - index))
    return value


def _check_width(width: int):
    if width not in (3, 4):
        raise ValueError("frame sizes are 3 or 4 bytes wide, not %r" % width)


def encode_plain(size: int, width: int) -> bytes:
    """Encode `size` as a plain big endian integer of `width` bytes.

    Raises:
        TagSizeOverflowError: if `size` doesn't fit into `width` bytes
        ValueError: for negative sizes or unsupported widths
    """

    _check_width(width)
    if size < 0:
        raise ValueError("negative size: %d" % size)
    if size >> (8 * width):
        raise TagSizeOverflowError(
            "frame content of %d bytes doesn't fit in %d bytes" % (
                size, width))
    return struct.pack(">I", size)[4 - width:]


def decode_plain(data: bytes, width: int) -> int:
    """Decode a plain big endian integer of `width` bytes"""

    _check_width(width)
    if len(data) != width:
        raise ValueError("expected %d bytes, got %d" % (width, len(data)))
    if width == 3:
        data = b"\x00" + data
    return struct.unpack(">I", data)[0] & ((1 << (8 * width)) - 1)


def unsynch_decode(value: bytes) -> bytes:
    """Reverse ID3 unsynchronisation.

    Raises:
        ValueError: if the data contains an invalid sequence
    """

    output = bytearray()
    safe = True
    append = output.append
    for val in bytearray(value):
        if safe:
            append(val)
            safe = val != 0xFF
        else:
            if val >= 0xE0:
                raise ValueError('invalid sync-safe string')
            elif val != 0x00:
                append(val)
            safe = True
    if not safe:
        raise ValueError('string ended unsafe')
    return bytes(output)


def split_terminated(data: bytes, wide: bool = False):
    """Split `data` at the first NUL terminator.

    For wide (UTF-16) text the terminator is two NUL bytes starting at an
    even offset.

    Returns:
        tuple(bytes, bytes) or None: the data before the terminator and
        the data after it, None if there is no terminator
    """

    if not wide:
        index = data.find(b"\x00")
        if index == -1:
            return None
        return data[:index], data[index + 1:]

    for index in range(0, len(data) - 1, 2):
        if data[index:index + 2] == b"\x00\x00":
            return data[:index], data[index + 2:]
    return None
