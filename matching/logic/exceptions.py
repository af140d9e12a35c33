"""
Domain errors raised outside the (non-throwing) scoring core.
"""


class MatchingError(Exception):
    """Base class for matching service errors."""


class VersionNotFoundError(MatchingError):
    def __init__(self, version_id: int):
        self.version_id = version_id
        super().__init__(f"Matching version {version_id} not found")


class VersionStateError(MatchingError):
    """A lifecycle transition was attempted on a version in the wrong status."""

    def __init__(self, version_id: int, status: str, action: str):
        self.version_id = version_id
        self.status = status
        self.action = action
        super().__init__(
            f"Cannot {action} version {version_id}: status is '{status}', only draft versions can be changed"
        )
