class MoCatalogError(ValueError):
    pass


class CatalogFormatError(MoCatalogError):
    """ The binary catalog is truncated, unsorted or otherwise not a catalog we can read. """


class OutOfBoundsError(CatalogFormatError):
    """ A header field or table entry points outside of the catalog data. """


class PluralFormError(MoCatalogError):
    """ The Plural-Forms expression can't be parsed, or can't be evaluated for a given number. """
