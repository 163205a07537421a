import struct

from .exceptions import OutOfBoundsError


INT_SIZE = 4

LITTLE_ENDIAN = "<"
BIG_ENDIAN = ">"


class ByteReader(object):
    """ Bounds checked access to fixed width integers and strings of a catalog buffer.

        Python's slicing quietly clamps out of range indexes and accepts negative ones,
        which would turn a corrupt table entry into a wrong (but plausible) message.
        Every read here is validated against the buffer first.
    """

    def __init__(self, data, byteorder=LITTLE_ENDIAN):
        self.data = bytes(data)
        self.byteorder = byteorder
        self._int = struct.Struct(byteorder + "i")

    def __len__(self):
        return len(self.data)

    def _check(self, offset, length, what):
        if offset < 0 or length < 0 or offset + length > len(self.data):
            raise OutOfBoundsError(
                "%s is out of bounds (offset %d, length %d, buffer size %d)" % (what, offset, length, len(self.data))
            )

    def read_int(self, offset):
        self._check(offset, INT_SIZE, "Value")
        return self._int.unpack_from(self.data, offset)[0]

    def read_string(self, offset, length):
        self._check(offset, length, "String")
        return self.data[offset:offset + length]
