# /app/core/exceptions.py

"""
Error kinds raised by the service layer.

Routers translate these into HTTP responses. `ValidationError` and
`NotFoundError` also subclass the matching built-in exceptions so callers
that only know about `ValueError` / `LookupError` keep working.
"""


class RosterError(Exception):
    """Base class for every error raised by the roster services."""


class ValidationError(RosterError, ValueError):
    """Input was rejected before anything was written to the store."""


class NotFoundError(RosterError, LookupError):
    """A referenced class or student does not exist (or is not visible to the caller)."""


class PersistenceError(RosterError):
    """
    The data store failed to read, write or deliver a snapshot.

    The failure is terminal for the current operation; nothing is retried.
    The original driver exception is available as `__cause__`.
    """
