"""Catalog error taxonomy.

Unrecognized categories and invalid pagination input are not errors here:
the resolver reports the former as a rejected ``Resolution`` and the query
helpers coerce the latter. Only store failures are raised.
"""


class CatalogError(Exception):
    """Base class for catalog failures."""

    message = "Catalog error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class StoreUnavailable(CatalogError):
    """The product store could not be reached or the read query failed."""

    message = "Product store unavailable"


class PersistenceWriteFailure(CatalogError):
    """A create or delete against the product store failed."""

    message = "Product write failed"
