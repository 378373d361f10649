import os
import sys
import struct
import contextlib
from io import StringIO
from tempfile import mkstemp
from unittest import TestCase as BaseTestCase

try:
    import pytest
except ImportError:
    raise SystemExit("pytest missing: sudo apt-get install python3-pytest")

from id3edit import encode_synchsafe


PNG_DATA = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01pixels"
JPEG_DATA = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01pixels"
AUDIO_DATA = b"\xff\xfb\x90\x64" + b"\x00\x11\x22\x33" * 16


def frame_v22(frame_id, content):
    """A raw ID3v2.2 frame"""

    return frame_id + struct.pack(">I", len(content))[1:] + content


def frame_v23(frame_id, content, flags=b"\x00\x00"):
    """A raw ID3v2.3 frame"""

    return frame_id + struct.pack(">I", len(content)) + flags + content


def tag_bytes(major, content, flags=0):
    """A raw ID3v2 tag with `content` following the header"""

    return (b"ID3" + bytes([major, 0, flags]) +
            encode_synchsafe(len(content)) + content)


def get_temp_empty(ext=""):
    """Returns an empty file with the extension"""

    fd, filename = mkstemp(suffix=ext)
    os.close(fd)
    return filename


def get_temp_file(data, ext=".mp3"):
    """Returns a file with the extension holding `data`"""

    filename = get_temp_empty(ext)
    with open(filename, "wb") as h:
        h.write(data)
    return filename


@contextlib.contextmanager
def capture_output():
    """
    with capture_output() as (stdout, stderr):
        some_action()
    print stdout.getvalue(), stderr.getvalue()
    """

    err = StringIO()
    out = StringIO()
    old_err = sys.stderr
    old_out = sys.stdout
    sys.stderr = err
    sys.stdout = out

    try:
        yield (out, err)
    finally:
        sys.stderr = old_err
        sys.stdout = old_out


class TestCase(BaseTestCase):

    def assertReallyEqual(self, a, b):
        self.assertEqual(a, b)
        self.assertEqual(b, a)
        self.assertTrue(a == b)
        self.assertTrue(b == a)
        self.assertFalse(a != b)
        self.assertFalse(b != a)

    def assertReallyNotEqual(self, a, b):
        self.assertNotEqual(a, b)
        self.assertNotEqual(b, a)
        self.assertFalse(a == b)
        self.assertFalse(b == a)
        self.assertTrue(a != b)
        self.assertTrue(b != a)


def unit(run=[], exitfirst=False):
    args = []

    if run:
        args.append("-k")
        args.append(" or ".join(run))

    if exitfirst:
        args.append("-x")

    args.append("tests")

    return pytest.main(args=args)
