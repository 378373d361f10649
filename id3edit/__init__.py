# Copyright (C) 2016  The id3edit authors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Read and write the ID3v2.2 and ID3v2.3 tags of MP3 files.

id3edit knows the artist, title, album, lyrics and cover art of a tag
and can put a new tag in front of the audio of a file without touching
the audio itself.

::

    from id3edit import MP3File

    f = MP3File("song.mp3")
    print(f.artist)
    f.album = "Cloud Factory"
    f.save()

The codec works on bytes only, files are handled by :class:`MP3File`::

    tag, header = read_tag(data)
    tag.title = "Home Back"
    data = splice(data, build(tag), header and header.size)

This is based off of the following references:

* http://id3.org/id3v2.3.0
* http://id3.org/id3v2-00
"""

from ._util import (
    HEADER_SIZE as HEADER_SIZE,
    MAX_TAG_SIZE as MAX_TAG_SIZE,
    FileDoesNotExistError as FileDoesNotExistError,
    ID3NoHeaderError as ID3NoHeaderError,
    ID3Warning as ID3Warning,
    MalformedFrameError as MalformedFrameError,
    NoDataError as NoDataError,
    NoPathSetError as NoPathSetError,
    NotAnMP3Error as NotAnMP3Error,
    TagEncodingError as TagEncodingError,
    TagSizeOverflowError as TagSizeOverflowError,
    decode_plain as decode_plain,
    decode_synchsafe as decode_synchsafe,
    encode_plain as encode_plain,
    encode_synchsafe as encode_synchsafe,
    error as error,
)
from ._specs import (
    Artwork as Artwork,
    Encoding as Encoding,
    ImageFormat as ImageFormat,
    PictureType as PictureType,
    Version as Version,
)
from ._tags import (
    ID3Header as ID3Header,
    ID3Tag as ID3Tag,
    build as build,
    find_header as find_header,
    read_tag as read_tag,
    scan as scan,
)
from ._file import MP3File as MP3File, splice as splice


version = (1, 0, 0)
"""Version tuple."""

version_string = ".".join(map(str, version))
"""Version string."""

ID3EditError = error


__all__ = [
    'HEADER_SIZE', 'MAX_TAG_SIZE', 'FileDoesNotExistError', 'ID3NoHeaderError',
    'ID3Warning', 'MalformedFrameError', 'NoDataError', 'NoPathSetError',
    'NotAnMP3Error', 'TagEncodingError', 'TagSizeOverflowError', 'decode_plain',
    'decode_synchsafe', 'encode_plain', 'encode_synchsafe', 'error',
    'Artwork', 'Encoding', 'ImageFormat', 'PictureType', 'Version',
    'ID3Header', 'ID3Tag', 'build', 'find_header', 'read_tag', 'scan',
    'MP3File', 'splice',
]
