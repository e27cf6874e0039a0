"""Domain errors reported to callers."""


class WasteTrackerError(Exception):
    """Base class for errors raised by the waste tracker services."""


class InvalidInput(WasteTrackerError):
    """Arguments are malformed or out of range."""


class InvalidConfiguration(InvalidInput):
    """A stored record carries an unusable configuration, such as zero capacity."""


class NotFound(WasteTrackerError):
    """A referenced user, bin, reward or notification does not exist."""


class Conflict(WasteTrackerError):
    """The requested change collides with the current state."""


class Unauthorized(WasteTrackerError):
    """The caller lacks permission for the operation."""
