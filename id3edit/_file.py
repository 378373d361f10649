# Copyright (C) 2016  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import os
import shutil
import tempfile

from ._specs import Version
from ._tags import ID3Tag, build, find_header, read_tag
from ._util import (
    HEADER_SIZE,
    FileDoesNotExistError,
    NoDataError,
    NoPathSetError,
    NotAnMP3Error,
    error,
)


def splice(data: bytes, tag_data: bytes,
           existing_size: int | None = None) -> bytes:
    """Put `tag_data` in front of the audio in `data`.

    Args:
        data (bytes): the complete file
        tag_data (bytes): the new tag, empty to leave `data` untouched
        existing_size (int): declared size of the tag `data` starts with,
            `None` if it has none

    Returns:
        bytes: the new tag followed by the audio of `data`
    """

    if not tag_data:
        return data

    start = 0 if existing_size is None else existing_size + HEADER_SIZE
    return bytes(tag_data) + bytes(data[start:])


def _get_umask():
    umask = os.umask(0)
    os.umask(umask)
    return umask


def _tag_property(name):

    def getter(self):
        return getattr(self.tags, name)

    def setter(self, value):
        setattr(self.tags, name, value)

    return property(getter, setter, doc="Same as ID3Tag.%s" % name)


class MP3File(object):
    """MP3File(path=None, data=None, overwrite=False)

    An MP3 file and its ID3v2 tag.

    Either a path or the file content has to be given. The tag is read
    right away; the file is only written by :meth:`save`.

    ::

        f = MP3File("song.mp3")
        f.album = "Cloud Factory"
        f.save()

    Arguments:
        path (str): path of an ``.mp3`` file
        data (bytes): content of an MP3 file
        overwrite (bool): don't read the existing tag, start with an empty
            one. The existing tag still gets replaced when saving.

    Attributes:
        tags (ID3Tag): the tag that will be written
        path (str): where :meth:`save` writes to by default

    Raises:
        NotAnMP3Error: if `path` doesn't have an ``.mp3`` extension
        FileDoesNotExistError: if there is no file at `path`
        NoDataError: if there is no data
        MalformedFrameError: if the existing tag is broken
    """

    __module__ = "id3edit"

    artist = _tag_property("artist")
    title = _tag_property("title")
    album = _tag_property("album")
    lyrics = _tag_property("lyrics")
    artwork = _tag_property("artwork")

    def __init__(self, path=None, data=None, overwrite: bool = False):
        if path is not None:
            path = os.fspath(path)
            data = self._load(path)

        if not data:
            raise NoDataError("no data to read a tag from")

        self.path = path
        self._data = bytes(data)
        self._header = find_header(self._data)

        if overwrite or self._header is None:
            self.tags = ID3Tag(Version.detect(self._data))
        else:
            self.tags, self._header = read_tag(self._data)

    @staticmethod
    def _load(path):
        ext = os.path.splitext(path)[1]
        if isinstance(ext, bytes):
            ext = os.fsdecode(ext)
        if ext.lower() != ".mp3":
            raise NotAnMP3Error("%r is not an MP3 file" % (path,))

        try:
            with open(path, "rb") as h:
                return h.read()
        except FileNotFoundError as e:
            raise FileDoesNotExistError(e) from e
        except IOError as e:
            raise error(e) from e

    @property
    def tag_size(self) -> int | None:
        """Declared size of the tag in the file, `None` if there is none"""

        if self._header is None:
            return None
        return self._header.size

    def set_artwork(self, data: bytes, format) -> None:
        """Same as ID3Tag.set_artwork"""

        self.tags.set_artwork(data, format)

    def pprint(self) -> str:
        return self.tags.pprint()

    def get_mp3_data(self) -> bytes:
        """Returns:
            bytes: the file content with the new tag in place of the old

        Raises:
            TagSizeOverflowError: if the tag gets too large
        """

        return splice(self._data, build(self.tags), self.tag_size)

    def save(self, path=None) -> None:
        """Write the file with the new tag.

        The file is replaced atomically.

        Args:
            path (str): where to write to, defaults to :attr:`path`

        Raises:
            NoPathSetError: if no path is known
            TagSizeOverflowError: if the tag gets too large
            error: if writing fails
        """

        if path is None:
            path = self.path
        if path is None:
            raise NoPathSetError("no path to write the file to")

        path = os.fsdecode(path)
        data = self.get_mp3_data()
        dirname = os.path.dirname(os.path.abspath(path))

        try:
            fd, temp = tempfile.mkstemp(prefix=".id3edit-", dir=dirname)
            try:
                with os.fdopen(fd, "wb") as h:
                    h.write(data)
                if os.path.exists(path):
                    shutil.copymode(path, temp)
                else:
                    os.chmod(temp, 0o666 & ~_get_umask())
                os.replace(temp, path)
            except BaseException:
                os.unlink(temp)
                raise
        except IOError as e:
            raise error(e) from e

        self._data = data
        self._header = find_header(data)
