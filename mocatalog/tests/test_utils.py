from django.test import SimpleTestCase, override_settings

from mocatalog.utils import supported_language_candidates


class UtilsTestCase(SimpleTestCase):

    def test_supported_language_candidates(self):
        """ Test the `supported_language_candidates` function. """
        # If the language code matches exactly, then it should be the only candidate
        with override_settings(LANGUAGES=[('en', 'English')]):
            self.assertEqual(supported_language_candidates("en"), ["en"])

        # Same exact matching logic applies to 2-part language codes, whatever their case
        with override_settings(LANGUAGES=[('en-us', 'English')]):
            self.assertEqual(supported_language_candidates("en-US"), ["en-us"])

        # A dialect falls back to its root language
        with override_settings(LANGUAGES=[('en', 'English')]):
            self.assertEqual(supported_language_candidates("en-us"), ["en"])

        # The root language is tried after the dialect itself
        with override_settings(LANGUAGES=[('de', 'German'), ('de-at', 'Austrian German')]):
            self.assertEqual(supported_language_candidates("de-at"), ["de-at", "de"])

        # A root language falls back to its supported dialects
        with override_settings(LANGUAGES=[('en-us', 'English'), ('en-gb', 'British English')]):
            self.assertEqual(supported_language_candidates("en"), ["en-us", "en-gb"])

        # If there is no sensible match there are no candidates
        with override_settings(LANGUAGES=[('fr', 'Francais')]):
            self.assertEqual(supported_language_candidates("en"), [])
