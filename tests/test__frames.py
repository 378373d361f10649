import zlib

from id3edit import Version, ImageFormat, Artwork, MalformedFrameError, \
    TagEncodingError
from id3edit._frames import get_layout, V22Layout, V23Layout, read_text, \
    read_lyrics, read_picture, sniff_picture, text_content, lyrics_content, \
    picture_content, get_encoding, Encoding, FrameHeader, unpack_content
from tests import TestCase, PNG_DATA, JPEG_DATA


class TLayout(TestCase):

    def test_get_layout(self):
        self.assertTrue(isinstance(get_layout(Version.V2), V22Layout))
        self.assertTrue(isinstance(get_layout(Version.V3), V23Layout))
        self.assertTrue(isinstance(get_layout(2), V22Layout))
        self.assertRaises(ValueError, get_layout, 4)

    def test_header_sizes(self):
        self.assertEqual(get_layout(Version.V2).HEADER_SIZE, 6)
        self.assertEqual(get_layout(Version.V3).HEADER_SIZE, 10)

    def test_fields(self):
        self.assertEqual(get_layout(Version.V2).fields, {
            b"TP1": "artist", b"TT2": "title", b"TAL": "album",
            b"ULT": "lyrics", b"PIC": "artwork"})
        self.assertEqual(get_layout(Version.V3).fields, {
            b"TPE1": "artist", b"TIT2": "title", b"TALB": "album",
            b"USLT": "lyrics", b"APIC": "artwork"})

    def test_read_header_v22(self):
        layout = get_layout(Version.V2)
        data = b"xxTAL\x00\x01\x02"
        self.assertEqual(
            layout.read_header(data, 2), FrameHeader(b"TAL", 0x102, 6))

    def test_read_header_v23(self):
        layout = get_layout(Version.V3)
        data = b"TALB\x00\x00\x01\x00\x00\x00"
        self.assertEqual(
            layout.read_header(data, 0), FrameHeader(b"TALB", 256, 10))

    def test_read_header_flags(self):
        layout = get_layout(Version.V3)
        data = b"TALB\x00\x00\x01\x00\x80\x40"
        self.assertEqual(
            layout.read_header(data, 0),
            FrameHeader(b"TALB", 256, 10, 0x8040))

    def test_unpack_content(self):
        plain = FrameHeader(b"TALB", 3, 10)
        self.assertEqual(unpack_content(plain, b"abc"), b"abc")
        packed = b"\x00\x00\x00\x03" + zlib.compress(b"abc")
        compressed = FrameHeader(b"TALB", len(packed), 10, 0x0080)
        self.assertEqual(unpack_content(compressed, packed), b"abc")
        self.assertIsNone(unpack_content(compressed, b"\x00\x00\x00\x03abc"))
        self.assertIsNone(unpack_content(compressed, b"\x00"))
        encrypted = FrameHeader(b"TALB", 3, 10, 0x0040)
        self.assertIsNone(unpack_content(encrypted, b"abc"))

    def test_read_header_short(self):
        layout = get_layout(Version.V3)
        self.assertRaises(
            MalformedFrameError, layout.read_header, b"TALB\x00\x00", 0)
        self.assertRaises(
            MalformedFrameError, layout.read_header, b"TAL\x00\x00\x01", 0)
        layout = get_layout(Version.V2)
        self.assertRaises(
            MalformedFrameError, layout.read_header, b"TAL\x00\x00", 0)

    def test_write_frame_v22(self):
        layout = get_layout(Version.V2)
        self.assertEqual(
            layout.write_frame(b"TT2", b"\x00abc\x00"),
            b"TT2\x00\x00\x05\x00abc\x00")

    def test_write_frame_v23(self):
        layout = get_layout(Version.V3)
        self.assertEqual(
            layout.write_frame(b"TIT2", b"\x00abc\x00"),
            b"TIT2\x00\x00\x00\x05\x00\x00\x00abc\x00")

    def test_frame_id(self):
        self.assertEqual(get_layout(Version.V3).frame_id("album"), b"TALB")
        self.assertEqual(get_layout(Version.V2).frame_id("artwork"), b"PIC")


class TPictureHeader(TestCase):

    def test_v22(self):
        layout = get_layout(Version.V2)
        self.assertEqual(
            layout.picture_header(ImageFormat.PNG), b"\x00PNG\x00\x00")
        self.assertEqual(
            layout.picture_header(ImageFormat.JPEG), b"\x00JPG\x00\x00")

    def test_v23(self):
        layout = get_layout(Version.V3)
        header = layout.picture_header(ImageFormat.PNG)
        self.assertEqual(header, b"\x00image/png\x00\x03\x00")
        self.assertEqual(len(header), 13)
        header = layout.picture_header(ImageFormat.JPEG)
        self.assertEqual(header, b"\x00image/jpeg\x00\x03\x00")
        self.assertEqual(len(header), 14)

    def test_content(self):
        layout = get_layout(Version.V2)
        artwork = Artwork(PNG_DATA, ImageFormat.PNG)
        self.assertEqual(
            picture_content(layout, artwork), b"\x00PNG\x00\x00" + PNG_DATA)


class TReadText(TestCase):

    def test_latin1(self):
        self.assertEqual(read_text(b"\x00Tupac\x00"), "Tupac\x00")
        self.assertEqual(read_text(b"\x00caf\xe9"), "caf\xe9")

    def test_empty(self):
        self.assertEqual(read_text(b""), "")
        self.assertEqual(read_text(b"\x00"), "")

    def test_utf16(self):
        content = b"\x01" + "Jinjer".encode("utf-16") + b"\x00\x00"
        self.assertEqual(read_text(content).strip("\x00"), "Jinjer")

    def test_utf16be(self):
        content = b"\x02" + "Jinjer".encode("utf-16-be")
        self.assertEqual(read_text(content), "Jinjer")

    def test_utf8(self):
        content = b"\x03" + "Pisîa".encode("utf-8")
        self.assertEqual(read_text(content), "Pisîa")

    def test_unknown_encoding(self):
        self.assertEqual(get_encoding(9), Encoding.LATIN1)
        self.assertEqual(read_text(b"\x09abc"), "abc")

    def test_broken_data_replaced(self):
        self.assertEqual(read_text(b"\x03a\xffb"), "a�b")


class TReadLyrics(TestCase):

    def test_empty_descriptor(self):
        self.assertEqual(
            read_lyrics(b"\x00eng\x00THIS IS A TEST"), "THIS IS A TEST")

    def test_descriptor(self):
        self.assertEqual(
            read_lyrics(b"\x00engverse\x00la la"), "la la")

    def test_missing_terminator(self):
        self.assertEqual(read_lyrics(b"\x00engXla la"), "la la")

    def test_utf16(self):
        content = (b"\x01eng" + b"\xff\xfe\x00\x00" +
                   "la la".encode("utf-16"))
        self.assertEqual(read_lyrics(content), "la la")

    def test_empty(self):
        self.assertEqual(read_lyrics(b""), "")


class TReadPicture(TestCase):

    def test_v22(self):
        layout = get_layout(Version.V2)
        content = b"\x00PNG\x03\x00" + PNG_DATA
        self.assertEqual(
            read_picture(layout, content), Artwork(PNG_DATA, ImageFormat.PNG))

    def test_v22_description(self):
        layout = get_layout(Version.V2)
        content = b"\x00JPG\x03cover\x00" + JPEG_DATA
        self.assertEqual(
            read_picture(layout, content),
            Artwork(JPEG_DATA, ImageFormat.JPEG))

    def test_v23(self):
        layout = get_layout(Version.V3)
        content = b"\x00image/png\x00\x03front\x00" + PNG_DATA
        self.assertEqual(
            read_picture(layout, content), Artwork(PNG_DATA, ImageFormat.PNG))

    def test_v23_exif_jpeg(self):
        layout = get_layout(Version.V3)
        data = b"\xff\xd8\xff\xe1\x00\x10Exif"
        content = b"\x00image/jpeg\x00\x03\x00" + data
        self.assertEqual(
            read_picture(layout, content), Artwork(data, ImageFormat.JPEG))

    def test_v23_utf16_description(self):
        layout = get_layout(Version.V3)
        content = (b"\x01image/png\x00\x03" + "cover".encode("utf-16") +
                   b"\x00\x00" + PNG_DATA)
        self.assertEqual(
            read_picture(layout, content), Artwork(PNG_DATA, ImageFormat.PNG))

    def test_v23_missing_fields_sniffed(self):
        layout = get_layout(Version.V3)
        content = b"\x00image/jpeg\x00" + JPEG_DATA
        artwork = read_picture(layout, content)
        self.assertEqual(artwork.format, ImageFormat.JPEG)
        self.assertEqual(artwork.data, JPEG_DATA)
        self.assertEqual(artwork.data[:2], b"\xff\xd8")

    def test_wrong_mime_sniffed(self):
        layout = get_layout(Version.V3)
        content = b"\x00image/jpeg\x00\x03\x00" + PNG_DATA
        self.assertEqual(
            read_picture(layout, content), Artwork(PNG_DATA, ImageFormat.PNG))

    def test_no_image(self):
        layout = get_layout(Version.V3)
        content = b"\x00image/gif\x00\x03\x00GIF89a"
        self.assertIsNone(read_picture(layout, content))
        self.assertIsNone(read_picture(layout, b""))
        self.assertIsNone(read_picture(get_layout(Version.V2), b"\x00"))

    def test_sniff_earliest(self):
        self.assertEqual(
            sniff_picture(b"xx" + JPEG_DATA + PNG_DATA),
            Artwork(JPEG_DATA + PNG_DATA, ImageFormat.JPEG))
        self.assertEqual(
            sniff_picture(b"xx" + PNG_DATA + JPEG_DATA),
            Artwork(PNG_DATA + JPEG_DATA, ImageFormat.PNG))
        self.assertIsNone(sniff_picture(b"\xff\xd8\xff\xe1"))


class TContent(TestCase):

    def test_text(self):
        self.assertEqual(text_content("Jinjer"), b"\x00Jinjer\x00")
        self.assertEqual(text_content("caf\xe9"), b"\x00caf\xe9\x00")

    def test_text_not_latin1(self):
        self.assertRaises(TagEncodingError, text_content, "あ")

    def test_lyrics(self):
        self.assertEqual(lyrics_content("la"), b"\x00eng\x00la")
        self.assertRaises(TagEncodingError, lyrics_content, "あ")
