""" Helpers building compiled catalogs for the tests. """
import struct

import polib

from mocatalog.catalog import MAGIC


POLISH_PLURAL_FORMS = (
    "nplurals=3; plural=(n==1 ? 0 : n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2);"
)
GERMAN_PLURAL_FORMS = "nplurals=2; plural=(n != 1);"


def compile_catalog(entries, plural_forms=GERMAN_PLURAL_FORMS, encoding="utf-8", language="de"):
    """ Compile `entries` with polib, the way msgfmt would.

        Each entry is a dict of POEntry keyword arguments, e.g.
        {"msgid": "File", "msgid_plural": "Files", "msgstr_plural": {0: "Datei", 1: "Dateien"}}
    """
    po = polib.POFile(encoding=encoding)
    po.metadata = {
        "Project-Id-Version": "mocatalog tests",
        "Language": language,
        "MIME-Version": "1.0",
        "Content-Type": "text/plain; charset=%s" % encoding,
        "Content-Transfer-Encoding": "8bit",
    }
    if plural_forms:
        po.metadata["Plural-Forms"] = plural_forms
    for entry in entries:
        po.append(polib.POEntry(**entry))
    return po.to_binary()


def pack_catalog(messages, magic=MAGIC, revision=0, count=None, byteorder="<"):
    """ Lay out (original, translation) byte string pairs in a catalog without any validation.

        The first pair is the header entry. Nothing is sorted, so broken catalogs can be built too.
    """
    n = len(messages)
    originals_offset = 7 * 4
    translations_offset = originals_offset + n * 8
    strings_offset = translations_offset + n * 8

    originals, translations, strings = [], [], b""
    for original, translation in messages:
        originals.extend([len(original), strings_offset + len(strings)])
        strings += original + b"\0"
    for original, translation in messages:
        translations.extend([len(translation), strings_offset + len(strings)])
        strings += translation + b"\0"

    header = struct.pack(
        byteorder + "7I",
        magic,
        revision,
        n if count is None else count,
        originals_offset,
        translations_offset,
        0, 0,  # no hash table
    )
    tables = struct.pack(byteorder + "%dI" % (4 * n), *(originals + translations))
    return header + tables + strings
