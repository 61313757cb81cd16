"""Errors raised by the proximity search."""


class QueryValidationError(Exception):
    """The caller-supplied query is malformed.  Message is user-facing."""


class DataSourceError(Exception):
    """The vendor data source failed, timed out, or returned garbage."""
