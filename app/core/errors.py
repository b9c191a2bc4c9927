"""Error taxonomy shared by services and the HTTP layer.

Services raise these; ``app.main`` renders them as ``{"kind", "detail"}``
with the matching status code. Only ``Unavailable`` is safe to retry blindly.
"""


class ServiceError(Exception):
    """Base for errors surfaced to the immediate caller."""

    kind = "internal"
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidArgument(ServiceError):
    """Malformed or self-referential input."""

    kind = "invalid_argument"
    status_code = 400


class NotFound(ServiceError):
    """Unknown user or pairing id."""

    kind = "not_found"
    status_code = 404


class PermissionDenied(ServiceError):
    """Actor is not allowed to act on the entity."""

    kind = "permission_denied"
    status_code = 403


class Conflict(ServiceError):
    """State-machine precondition violated."""

    kind = "conflict"
    status_code = 409


class Unavailable(ServiceError):
    """Store I/O failure or timeout; the operation was not applied."""

    kind = "unavailable"
    status_code = 503
