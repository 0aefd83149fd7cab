"""
Error Taxonomy for Brainrot Comments
====================================
Every failure the add-on can report derives from BrainrotError. Each class
carries a user-facing message that names the cause and, where there is one,
the remedy.

Generation failures (GenerationError subclasses) are never fatal: the
add-comment action reports them and falls back to a fixed phrase.
"""

from typing import Optional


class BrainrotError(Exception):
    """Base class for all Brainrot Comments errors."""

    default_message = "Brainrot comment failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class GenerationError(BrainrotError):
    """Phrase generation failed; the caller substitutes the fallback phrase."""

    default_message = "Failed to generate brainrot comment"


class CredentialMissing(GenerationError):
    default_message = (
        "OpenAI API key not configured. "
        "Run 'brainrot set-key' to configure it."
    )


class Unauthorized(GenerationError):
    default_message = (
        "Invalid OpenAI API key. "
        "Run 'brainrot set-key' to update it."
    )


class RateLimited(GenerationError):
    default_message = (
        "OpenAI rate limit exceeded. Please try again later."
    )


class ServiceError(GenerationError):
    default_message = "OpenAI request failed"


class NoActiveEditor(BrainrotError):
    default_message = "No active editor found"


class InvalidCredential(BrainrotError):
    """Raised when a key entered through set-key fails validation."""

    default_message = "Invalid API key format. Keys start with 'sk-'."


class EditRejected(BrainrotError):
    """Raised when the document refuses a batched edit."""

    default_message = "Failed to insert comment: the edit was rejected"


class ConfigError(BrainrotError):
    default_message = "Invalid configuration"
