"""Exceptions raised by the store layer and caught at the handler boundary."""


class StoreError(Exception):
    """The database was unavailable or a query failed."""


class DuplicateEntityError(StoreError):
    """An insert collided with a UNIQUE constraint."""
