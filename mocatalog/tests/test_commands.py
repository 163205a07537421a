# -*- coding: utf-8 -*-
import os
import shutil
import tempfile
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase

from mocatalog.tests.catalogs import compile_catalog, pack_catalog


class MoGettextCommandTests(SimpleTestCase):

    def setUp(self):
        directory = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, directory)
        self.path = os.path.join(directory, "django.mo")
        with open(self.path, "wb") as f:
            f.write(compile_catalog([
                {"msgid": "cat", "msgstr": "Katze"},
                {"msgid": "Open", "msgstr": "Öffnen", "msgctxt": "Menu"},
                {"msgid": "File", "msgid_plural": "Files", "msgstr_plural": {0: "Datei", 1: "Dateien"}},
            ]))

    def call(self, *args, **kwargs):
        out = StringIO()
        call_command("mogettext", *args, stdout=out, **kwargs)
        return out.getvalue()

    def test_gettext(self):
        self.assertEqual(self.call(self.path, "cat"), "Katze\n")
        self.assertEqual(self.call(self.path, "dog"), "dog\n")
        self.assertEqual(self.call(self.path, "Open", context="Menu"), "Öffnen\n")

    def test_ngettext(self):
        self.assertEqual(self.call(self.path, "File", "Files", "1"), "Datei\n")
        self.assertEqual(self.call(self.path, "File", "Files", "3"), "Dateien\n")
        self.assertEqual(self.call(self.path, "Folder", "Folders", "3"), "Folders\n")

    def test_header(self):
        self.assertIn("Plural-Forms: nplurals=2; plural=(n != 1);", self.call(self.path, header=True))

    def test_missing_number(self):
        self.assertRaises(CommandError, self.call, self.path, "File", "Files")

    def test_missing_msgid(self):
        self.assertRaises(CommandError, self.call, self.path)

    def test_unreadable_catalog(self):
        self.assertRaises(CommandError, self.call, self.path + ".missing", "cat")

        with open(self.path, "wb") as f:
            f.write(pack_catalog([(b"", b"")], revision=3))
        self.assertRaises(CommandError, self.call, self.path, "cat")

    def test_division_by_zero(self):
        with open(self.path, "wb") as f:
            f.write(pack_catalog([
                (b"", b"Plural-Forms: nplurals=2; plural=n%0;\n"),
                (b"File\0Files", b"Datei\0Dateien"),
            ]))
        self.assertRaises(CommandError, self.call, self.path, "File", "Files", "2")
