# /examcell/services/errors.py

"""
Business-rule exceptions raised by the service layer.

They all subclass ValueError so a router can keep the familiar
`except ValueError` translation, while still mapping each kind to its own
HTTP status (see `routers/http_errors.py`).
"""


class ValidationError(ValueError):
    """A request is well-formed JSON but breaks a domain rule (HTTP 400)."""


class NotFoundError(ValueError):
    """A referenced class, student or subject id does not exist (HTTP 404)."""


class ConflictError(ValueError):
    """A uniqueness rule would be violated (HTTP 400 with a descriptive message)."""
