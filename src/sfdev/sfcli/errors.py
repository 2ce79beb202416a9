"""Exceptions raised by the Salesforce CLI layer."""


class SfdevError(Exception):
    """Base exception for sfdev errors."""


class ToolNotFoundError(SfdevError):
    """Raised when neither candidate CLI binary answers a version probe."""

    def __init__(self, candidates: tuple[str, ...] | list[str] = ("sf", "sfdx")):
        self.candidates = tuple(candidates)
        names = " or ".join(f"'{c}'" for c in self.candidates)
        super().__init__(f"Salesforce CLI not found. Please install {names}.")


class SFCommandError(SfdevError):
    """Raised when a CLI process cannot be spawned or an operation fails outright."""

    def __init__(self, message: str, stderr: str = "", exit_code: int | None = None):
        self.stderr = stderr
        self.exit_code = exit_code
        super().__init__(message)
