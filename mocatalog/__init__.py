from .catalog import Catalog
from .exceptions import CatalogFormatError, MoCatalogError, OutOfBoundsError, PluralFormError
