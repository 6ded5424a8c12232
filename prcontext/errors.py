"""Error kinds raised by pull request contexts and their adapters."""


class ContextError(Exception):
    """Base class for every error raised through a Context."""

    pass


class IdentityLookupError(ContextError, LookupError):
    """A user, org, team or repository cannot be resolved.

    Also raised for malformed team identifiers and unknown permission tokens.
    """

    pass


class BackendError(ContextError):
    """Transport, authentication or rate-limit failure from the hosting service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ContractViolation(ContextError):
    """An adapter returned data that breaks the Context contract."""

    pass
