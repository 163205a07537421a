""" Translate messages for the active Django language using compiled catalogs.

Catalogs are looked up as `<path>/<locale>/LC_MESSAGES/<domain>.mo` for every path in
`settings.LOCALE_PATHS`; the domain is `settings.MOCATALOG_DOMAIN` ("django" by default). The
active language is matched against `settings.LANGUAGES`, and a dialect without a catalog of
its own uses its root language's ("de-at" falls back to "de").

A catalog that is missing or can't be read never breaks the page: we log it and use an empty
catalog, which returns the untranslated messages.
"""
import logging
import os
import threading

from django.conf import settings
from django.utils.functional import lazy
from django.utils.translation import get_language, to_locale

from mocatalog.catalog import Catalog
from mocatalog.exceptions import MoCatalogError
from mocatalog.utils import supported_language_candidates

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = "django"

# Settings which change where catalogs come from
CATALOG_SETTINGS = ("LOCALE_PATHS", "MOCATALOG_DOMAIN", "LANGUAGES")


def catalog_paths(language_code, domain=None):
    domain = domain or getattr(settings, "MOCATALOG_DOMAIN", DEFAULT_DOMAIN)
    locale = to_locale(language_code)
    return [
        os.path.join(locale_path, locale, "LC_MESSAGES", "%s.mo" % domain)
        for locale_path in settings.LOCALE_PATHS
    ]


class CatalogCache(object):
    def __init__(self):
        self._write_lock = threading.Lock()
        self._catalogs = {}

    def invalidate(self, language_code=None):
        with self._write_lock:
            if language_code is None:
                self._catalogs = {}
            else:
                self._catalogs.pop(language_code, None)

    def load_catalog(self, language_code):
        for path in catalog_paths(language_code):
            if not os.path.exists(path):
                continue
            try:
                catalog = Catalog.from_file(path)
            except (IOError, MoCatalogError):
                logger.exception("Unable to load catalog %s, falling back to untranslated messages", path)
                return Catalog()
            logger.debug("Loaded catalog %s for %s", path, language_code)
            return catalog

        logger.debug("No catalog found for %s, falling back to untranslated messages", language_code)
        return Catalog()

    def get_catalog(self, language_code):
        catalog = self._catalogs.get(language_code)
        if catalog is None:
            catalog = self.load_catalog(language_code)
            with self._write_lock:
                # Another thread may have loaded it meanwhile, keep whichever got there first
                catalog = self._catalogs.setdefault(language_code, catalog)
        return catalog


# Global variable so that we only need to load each catalog once per
# instance
CATALOG_CACHE = CatalogCache()


def invalidate_language(language_code=None):
    CATALOG_CACHE.invalidate(language_code)


def invalidate_on_setting_change(sender, setting, **kwargs):
    """ Connected to the setting_changed signal, so overridden settings in tests take effect. """
    if setting in CATALOG_SETTINGS:
        CATALOG_CACHE.invalidate()


def get_catalog(language_code=None):
    language_code = language_code or get_language()
    # With translations deactivated return the empty catalog
    if language_code is None:
        return Catalog()

    candidates = supported_language_candidates(language_code)
    if not candidates:
        logger.debug("%s is not a supported language, falling back to untranslated messages", language_code)
        return Catalog()

    for candidate in candidates:
        catalog = CATALOG_CACHE.get_catalog(candidate)
        if len(catalog):
            return catalog
    return catalog


def gettext(message):
    return get_catalog().gettext(message)


def pgettext(context, message):
    return get_catalog().pgettext(context, message)


def ngettext(singular, plural, number):
    return get_catalog().ngettext(singular, plural, number)


def npgettext(context, singular, plural, number):
    return get_catalog().npgettext(context, singular, plural, number)


gettext_lazy = lazy(gettext, str)
pgettext_lazy = lazy(pgettext, str)
ngettext_lazy = lazy(ngettext, str)
npgettext_lazy = lazy(npgettext, str)
