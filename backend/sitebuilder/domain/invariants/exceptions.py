class InvariantViolation(ValueError):
    """Raised when content breaks a rule the CMS must always uphold."""


class LayoutValidationError(InvariantViolation):
    """
    Raised when a layout document does not match any known schema version.

    `issues` holds the flattened validation errors so the editor can point
    at the offending block.
    """

    def __init__(self, message: str, issues: list | None = None):
        super().__init__(message)
        self.issues = issues or []
