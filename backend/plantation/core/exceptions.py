# backend/plantation/core/exceptions.py

"""
Client-correctable failures raised by the service layer.

Routers translate every PlantationError into HTTP 400. Missing resources are
not exceptions: services return None / False and routers answer 404.
Anything else (database down, driver errors) propagates to the
exception-logging middleware and becomes a 500.
"""


class PlantationError(Exception):
    """Base class for errors the caller can fix."""


class InvalidRequestError(PlantationError):
    """Malformed identifier, unknown reference id, missing required value."""


class InvalidStateError(PlantationError):
    """The requested transition is not allowed for the task's current state."""
