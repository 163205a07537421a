from django.conf import settings


def supported_language_candidates(language_code):
    """ The supported languages (settings.LANGUAGES) to use for `language_code`, best match first.

        An exact match comes first, then the root language of a dialect ("de" for "de-at"), then
        other dialects of the same root language ("pt-br" for "pt"). Returns an empty list when
        nothing matches.
    """
    supported = [code.lower() for code, name in settings.LANGUAGES]
    language_code = language_code.lower()
    root_language = language_code.split("-")[0]

    candidates = []
    if language_code in supported:
        candidates.append(language_code)

    if root_language != language_code and root_language in supported:
        candidates.append(root_language)

    check = "{}-".format(root_language)
    candidates.extend(x for x in supported if x.startswith(check) and x not in candidates)
    return candidates
