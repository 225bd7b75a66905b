"""Exception types shared across PLAYTOOLS modules."""


class PlaytoolsError(Exception):
    """Base class for all PLAYTOOLS errors."""
    pass


class SessionError(PlaytoolsError):
    """Raised when a valid AWS SSO session cannot be established."""
    pass


class ExecutableNotFoundError(SessionError):
    """Raised when executable cannot be found in system PATH."""
    pass


class InvocationError(PlaytoolsError):
    """Raised when the Lambda function could not be invoked."""
    pass
