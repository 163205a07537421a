""" Compiled gettext catalogs (.mo files).

The container starts with five 32-bit integers:

    offset 0   magic number 0x950412de
    offset 4   file format revision, always 0
    offset 8   number of messages N
    offset 12  offset of the table with original messages
    offset 16  offset of the table with translated messages

Each table is N (length, offset) pairs pointing at strings in the same buffer. Entry 0 is the
catalog metadata: an empty original and a translation with "Key: value" header lines. The other
originals are sorted, which is what lets us binary search them instead of using the optional hash
table (we never do).

Plural messages store "singular\\0plural" as the original and every translated form, separated by
NUL bytes, as the translation. Messages with a context are stored as "context\\x04msgid".
"""
import bisect
import codecs
import logging
import re
from collections import namedtuple

from .exceptions import CatalogFormatError
from .plurals import expr_parser
from .reader import BIG_ENDIAN, INT_SIZE, LITTLE_ENDIAN, ByteReader


logger = logging.getLogger(__name__)

MAGIC = 0x950412de
REVISION = 0
HEADER_SIZE = 5 * INT_SIZE

COUNT_OFFSET = 2 * INT_SIZE
ORIGINALS_OFFSET = 3 * INT_SIZE
TRANSLATIONS_OFFSET = 4 * INT_SIZE

CONTEXT_GLUE = "\x04"
DEFAULT_CHARSET = "utf-8"

RE_CHARSET = re.compile(br"charset=\s*([^\s;]+)", re.IGNORECASE)


def leading(message):
    """ The part of a packed message up to its first NUL byte; the sort and lookup key. """
    end = message.find(b"\0")
    return message if end == -1 else message[:end]


class MessageTable(object):
    """ One of the two (length, offset) tables, indexed by entry number. """

    def __init__(self, reader, offset, count):
        self.reader = reader
        self.offset = offset
        self.count = count

    def __len__(self):
        return self.count

    def __getitem__(self, index):
        if not 0 <= index < self.count:
            raise IndexError(index)
        position = self.offset + index * 2 * INT_SIZE
        length = self.reader.read_int(position)
        return self.reader.read_string(self.reader.read_int(position + INT_SIZE), length)


class LeadingKeys(object):
    """ Read only view of a table's leading substrings, so `bisect` can search it in place. """

    def __init__(self, table):
        self.table = table

    def __len__(self):
        return len(self.table)

    def __getitem__(self, index):
        return leading(self.table[index])


CatalogData = namedtuple("CatalogData", "reader count originals translations header plural charset")


def detect_byteorder(data):
    if len(data) < HEADER_SIZE:
        raise CatalogFormatError(
            "Catalog is too short (%d bytes), the header alone is %d bytes" % (len(data), HEADER_SIZE)
        )
    for byteorder in (LITTLE_ENDIAN, BIG_ENDIAN):
        reader = ByteReader(data, byteorder)
        if reader.read_int(0) & 0xffffffff == MAGIC:
            return reader
    raise CatalogFormatError("Wrong magic number, this is not a compiled gettext catalog")


def check_originals(originals):
    """ Make sure the message ids (besides the reserved first one) are present and sorted. """
    keys = LeadingKeys(originals)
    previous = None
    for index in range(1, len(keys)):
        key = keys[index]
        if not key:
            raise CatalogFormatError("Message id #%d is empty, only the header entry may be" % index)
        if previous is not None and key < previous:
            raise CatalogFormatError("Message ids are not sorted (entry #%d: %r < %r)" % (index, key, previous))
        previous = key


def check_translations(translations):
    # Reading an entry checks its bounds
    for index in range(len(translations)):
        translations[index]


def find_plural_forms(header):
    """ Return the plural= expression source of the Plural-Forms header, or None.

        Plural-Forms lines without a plural= are skipped; if several have one, the last wins.
    """
    found = None
    for line in header.splitlines():
        if not line.startswith(b"Plural-Forms:"):
            continue
        _, marker, expression = line.partition(b"plural=")
        if marker:
            found = expression.rstrip(b" \t\r\n;").decode("latin-1")
    return found


def find_charset(header):
    for line in header.splitlines():
        if not line.lower().startswith(b"content-type:"):
            continue
        match = RE_CHARSET.search(line)
        if not match:
            break
        charset = match.group(1).decode("latin-1")
        try:
            return codecs.lookup(charset).name
        except LookupError:
            logger.warning("Unknown charset %r in catalog header, using %s", charset, DEFAULT_CHARSET)
            break
    return DEFAULT_CHARSET


def parse_catalog(data):
    """ Validate the binary catalog `data` and compile its plural rule.

        Raises CatalogFormatError if `data` isn't a usable catalog and PluralFormError if its
        Plural-Forms expression can't be compiled. Every table entry is read here, so lookups
        on the resulting catalog never run out of bounds.
    """
    reader = detect_byteorder(data)
    if reader.read_int(INT_SIZE) != REVISION:
        raise CatalogFormatError("Unknown catalog revision %d" % reader.read_int(INT_SIZE))

    count = reader.read_int(COUNT_OFFSET)
    if count <= 0:
        raise CatalogFormatError("Invalid count of message ids (%d), must be at least 1" % count)

    originals = MessageTable(reader, reader.read_int(ORIGINALS_OFFSET), count)
    translations = MessageTable(reader, reader.read_int(TRANSLATIONS_OFFSET), count)

    check_originals(originals)
    check_translations(translations)

    header = translations[0]
    plural = None
    source = find_plural_forms(header)
    if source:
        plural = expr_parser.parse(source)

    return CatalogData(
        reader=reader,
        count=count,
        originals=originals,
        translations=translations,
        header=header,
        plural=plural,
        charset=find_charset(header),
    )


class Catalog(object):
    """ A loaded translation catalog.

        `Catalog()` without data is an empty catalog which returns every message untranslated.
        Lookups take and return `str`; keys are encoded and translations decoded with the charset
        from the catalog's Content-Type header. The catalog is immutable once constructed and can
        be shared between threads.
    """

    def __init__(self, data=None):
        self._data = parse_catalog(data) if data is not None else None
        if self._data is not None:
            self._keys = LeadingKeys(self._data.originals)
            logger.debug("Loaded catalog with %d messages (charset %s)", self._data.count - 1, self.charset)

    @classmethod
    def from_file(cls, path):
        with open(path, "rb") as f:
            return cls(f.read())

    def __len__(self):
        return self._data.count if self._data else 0

    @property
    def charset(self):
        return self._data.charset if self._data else DEFAULT_CHARSET

    @property
    def plural(self):
        """ The compiled Plural-Forms expression, or None. """
        return self._data.plural if self._data else None

    @property
    def header(self):
        if not self._data:
            return ""
        return self._decode(self._data.header)

    def _decode(self, message):
        return message.decode(self.charset, "replace")

    def _index(self, msgid):
        if not self._data:
            return None
        if not msgid:
            # The reserved header entry has the empty message id
            return 0
        try:
            key = msgid.encode(self.charset)
        except UnicodeEncodeError:
            return None

        index = bisect.bisect_left(self._keys, key, 1, len(self._keys))
        if index < len(self._keys) and self._keys[index] == key:
            return index
        return None

    def _forms(self, msgid):
        """ The translated forms of `msgid`, or None if there's no non-empty translation. """
        index = self._index(msgid)
        if index is None:
            return None
        forms = self._data.translations[index].split(b"\0")
        if not forms[0]:
            return None
        return forms

    def _singular(self, key, msgid):
        forms = self._forms(key)
        if forms is None:
            return msgid
        return self._decode(forms[0])

    def _plural(self, key, msgid, msgid_plural, n):
        forms = self._forms(key)
        if forms is not None and self.plural is not None:
            form = expr_parser.calculate(self.plural, n)
            if 0 <= form < len(forms):
                return self._decode(forms[form])
        return msgid if n == 1 else msgid_plural

    def plural_index(self, n):
        """ The index of the plural form to use for `n`.

            Without a Plural-Forms rule this is the English rule, which is what `ngettext` falls
            back to when choosing between the untranslated messages.
        """
        if self.plural is None:
            return 0 if n == 1 else 1
        return expr_parser.calculate(self.plural, n)

    def gettext(self, msgid):
        return self._singular(msgid, msgid)

    def ngettext(self, msgid, msgid_plural, n):
        """ Translate `msgid` in the plural form for `n`.

            Falls back to `msgid` for n == 1 and `msgid_plural` otherwise when the message isn't
            translated, the catalog has no plural rule or the rule selects a form the translation
            doesn't have. A rule dividing by zero for `n` raises PluralFormError.
        """
        return self._plural(msgid, msgid, msgid_plural, n)

    def pgettext(self, context, msgid):
        return self._singular(context + CONTEXT_GLUE + msgid, msgid)

    def npgettext(self, context, msgid, msgid_plural, n):
        return self._plural(context + CONTEXT_GLUE + msgid, msgid, msgid_plural, n)
