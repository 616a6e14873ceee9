"""
Error taxonomy for user account operations.

Callers (an HTTP layer, a CLI) translate these into their own responses;
nothing here formats user-facing output.
"""


class UserHubError(Exception):
    """Base class for every error raised by userhub."""


class ValidationError(UserHubError, ValueError):
    """A field has a bad format or a required field is missing."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class ImmutableFieldError(UserHubError):
    """Attempt to change a field that can only be set at creation."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Field '{field}' cannot be changed after creation")


class DuplicateUsernameError(UserHubError):
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"The username {username} already exists")


class NotFoundError(UserHubError):
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User {username} not found")


class ComparisonError(UserHubError):
    """Password verification could not run (e.g. malformed stored hash).

    Distinct from a plain mismatch, which is reported as False.
    """


class StoreError(UserHubError):
    """Underlying persistence failure. The driver error is chained as __cause__."""
