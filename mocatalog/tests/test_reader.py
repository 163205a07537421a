import struct
import unittest

from mocatalog.exceptions import CatalogFormatError, OutOfBoundsError
from mocatalog.reader import BIG_ENDIAN, ByteReader


class ByteReaderTestCase(unittest.TestCase):
    def setUp(self):
        self.reader = ByteReader(struct.pack("<2i", 7, -2) + b"hello")

    def test_read_int(self):
        self.assertEqual(self.reader.read_int(0), 7)
        self.assertEqual(self.reader.read_int(4), -2)

    def test_read_int_big_endian(self):
        reader = ByteReader(struct.pack(">i", 0x01020304), BIG_ENDIAN)
        self.assertEqual(reader.read_int(0), 0x01020304)

    def test_read_string(self):
        self.assertEqual(self.reader.read_string(8, 5), b"hello")
        self.assertEqual(self.reader.read_string(13, 0), b"")

    def test_out_of_bounds(self):
        self.assertRaises(OutOfBoundsError, self.reader.read_int, 10)
        self.assertRaises(OutOfBoundsError, self.reader.read_int, -1)
        self.assertRaises(OutOfBoundsError, self.reader.read_string, 8, 6)
        self.assertRaises(OutOfBoundsError, self.reader.read_string, 8, -1)
        self.assertRaises(OutOfBoundsError, self.reader.read_string, -2, 1)

    def test_out_of_bounds_is_a_format_error(self):
        with self.assertRaises(CatalogFormatError):
            ByteReader(b"abc").read_int(0)
