"""
Structured error codes for line resolution and update failures.
Use these keys in log records and status values; map to user-facing messages in callers.
"""

# Known error keys
NOT_READY = "not_ready"
DEGENERATE_GEOMETRY = "degenerate_geometry"
MEASUREMENT_FAILURE = "measurement_failure"
INVALID_CONFIGURATION = "invalid_configuration"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    NOT_READY: "Endpoint has not been measured yet; the line is hidden until both ends resolve.",
    DEGENERATE_GEOMETRY: "Start and end coincide; nothing visible is drawn.",
    MEASUREMENT_FAILURE: "Element could not be measured. Retrying on the next poll.",
    INVALID_CONFIGURATION: "Unrecognized option value; the default was used instead.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)


class NotReadyError(LookupError):
    """An element endpoint has no measured layout yet."""

    code = NOT_READY

    def __init__(self, element: object = None) -> None:
        super().__init__(user_message(NOT_READY))
        self.element = element
