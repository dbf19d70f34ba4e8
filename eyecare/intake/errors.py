# eyecare/intake/errors.py


class WizardValidationError(ValueError):
    """Raised when the wizard refuses an action; the message is user-facing."""


class InvalidImageError(ValueError):
    """Raised when an uploaded data URL does not hold a usable image."""


class UnknownCategoryError(KeyError):
    """Raised for a catalog category that does not exist."""
