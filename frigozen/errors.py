"""Exceptions raised at the library surface."""


class InvalidDateError(ValueError):
    """A date correction could not be parsed. The stored date is unchanged."""
