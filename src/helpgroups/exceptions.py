class HelpGroupsError(Exception):
    """Base exception for flag group errors."""

    def __init__(
        self, message: str = "An error occurred while grouping flags"
    ) -> None:
        super().__init__(message)


class UnknownGroupError(HelpGroupsError, KeyError):
    """Raised when a flag group name is not present in the registry."""

    def __init__(self, name: str | None = None) -> None:
        message = (
            f"Flag group '{name}' does not exist"
            if name
            else "Flag group does not exist"
        )
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would wrap the message in quotes
        return str(self.args[0])


class DuplicateGroupError(HelpGroupsError):
    """Raised when a flag group name is registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Flag group '{name}' already exists")


class EmptyRegistryError(HelpGroupsError):
    """Raised when a fallback group is needed but the registry is empty."""

    def __init__(self) -> None:
        super().__init__("Registry has no groups to use as fallback")


class StagingError(HelpGroupsError):
    """Raised when a staging token does not match the registry state."""

    pass
