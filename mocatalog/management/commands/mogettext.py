from django.core.management.base import BaseCommand, CommandError

from mocatalog.catalog import Catalog
from mocatalog.exceptions import MoCatalogError, PluralFormError


class Command(BaseCommand):
    help = (
        "Looks up a message in a compiled catalog (.mo file) and prints its translation. "
        "Pass a plural message id and a number to look up a plural form."
    )

    def add_arguments(self, parser):
        parser.add_argument("catalog", help="Path to the .mo file")
        parser.add_argument("msgid", nargs="?", help="The message to translate")
        parser.add_argument("msgid_plural", nargs="?", help="The plural form of the message")
        parser.add_argument("number", nargs="?", type=int, help="The number selecting the plural form")
        parser.add_argument(
            "--context",
            dest="context",
            help="Look up the message in this context (msgctxt)"
        )
        parser.add_argument(
            "--header",
            action="store_true",
            dest="header",
            default=False,
            help="Print the catalog header instead of a message"
        )

    def handle(self, *args, **options):
        try:
            catalog = Catalog.from_file(options["catalog"])
        except (IOError, MoCatalogError) as e:
            raise CommandError("Unable to load %s: %s" % (options["catalog"], e))

        if options["header"]:
            self.stdout.write(catalog.header)
            return

        msgid = options["msgid"]
        if msgid is None:
            raise CommandError("Must provide a message id (or --header)")

        msgid_plural = options["msgid_plural"]
        number = options["number"]
        context = options["context"]

        if msgid_plural is None:
            if context is not None:
                self.stdout.write(catalog.pgettext(context, msgid))
            else:
                self.stdout.write(catalog.gettext(msgid))
            return

        if number is None:
            raise CommandError("Must provide a number")

        try:
            if context is not None:
                translated = catalog.npgettext(context, msgid, msgid_plural, number)
            else:
                translated = catalog.ngettext(msgid, msgid_plural, number)
        except PluralFormError as e:
            raise CommandError("Unable to select a plural form for %s: %s" % (number, e))
        self.stdout.write(translated)
