class RosterError(Exception):
    """Base class for errors raised by the attendance data pipeline"""


class NotAuthenticated(RosterError):
    """Raised when no OAuth credentials have been issued yet"""
    def __init__(self, message="Not authenticated with Google. Visit /auth to log in."):
        self.message = message
        super().__init__(self.message)


class PreconditionFailed(RosterError):
    """Raised before a read when credentials or sheet coordinates are missing"""


class UpstreamError(RosterError):
    """Raised when Google rejected a call or could not be reached"""
    def __init__(self, cause, message=None):
        self.cause = cause
        self.message = message or f"Google API call failed: {cause}"
        super().__init__(self.message)


class InvalidInput(RosterError):
    """Raised when the sheet response is not a list of rows"""


class PersistenceError(RosterError):
    """Describes a failed state write. Logged on the error channel, never raised."""
    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not write '{path}': {cause}")
