from typing import Optional, Any

class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details

class BackendError(InfrastructureError):
    """Raised when an outbound telemetry or crash backend fails."""
    pass

class AuthorizationError(InfrastructureError):
    """Raised when a backend is not permitted to send, e.g. without consent."""
    pass
