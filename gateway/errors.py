"""Error taxonomy for calls the gateway makes to the backend."""

from typing import Optional


class GatewayError(Exception):
    """Base exception for a failed upstream operation."""
    pass


class NotFoundError(GatewayError):
    """Backend answered 404 for a single-record operation."""

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found")


class UpstreamFailure(GatewayError):
    """Backend answered with any other non-2xx status."""

    def __init__(self, status_code: int, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        msg = f"Backend error: {status_code}"
        if body:
            msg = f"{msg} - {body}"
        super().__init__(msg)


class TransportFailure(GatewayError):
    """Network error, or a body that is not valid JSON."""
    pass
