"""Exception types surfaced to CLI users."""


class SkcfError(Exception):
    """Base class for errors reported to the user as ``Error: <message>``."""


class InvalidDurationError(SkcfError, ValueError):
    """Duration string is not of the form ``<value><unit>``."""


class ProjectIdError(SkcfError):
    def __init__(self):
        super().__init__("project ID is not set. Use --project-id, SKCF_PROJECT_ID or the config file.")


class AbortedError(SkcfError):
    """User declined the confirmation prompt."""

    def __init__(self):
        super().__init__("operation aborted")


class ApiError(SkcfError):
    """Non-2xx response from the SKCF API."""

    def __init__(self, status_code: int, message: str, url: str = ""):
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(f"API returned {status_code}: {message}" if message else f"API returned {status_code}")


# ── Wait outcomes ────────────────────────────────────────────────


class WaitError(SkcfError):
    """Base class for every non-success outcome of a wait."""

    def __init__(self, handle, message):
        self.handle = handle
        super().__init__(message)


class StatusQueryFailedError(WaitError):
    def __init__(self, handle, cause):
        self.cause = cause
        super().__init__(handle, f"query status of {handle.label}: {cause}")


class OperationFailedError(WaitError):
    def __init__(self, handle, reason):
        self.reason = reason
        super().__init__(handle, f"operation on {handle.label} failed: {reason}")


class WaitCancelledError(WaitError):
    def __init__(self, handle):
        super().__init__(handle, f"wait for {handle.label} cancelled")


class WaitTimeoutError(WaitError):
    def __init__(self, handle, max_elapsed):
        self.max_elapsed = max_elapsed
        super().__init__(handle, f"timed out after {max_elapsed:g}s waiting for {handle.label}")
