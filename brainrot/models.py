"""
Structured Models for Generated Phrases
=======================================
Pydantic models for what comes back from the generation service.

BrainrotPhrase normalizes raw completion text: it strips wrapping quotes,
collapses whitespace and keeps at most MAX_WORDS words. Empty text fails
validation.

GenerationResult carries either a phrase or the error that prevented one, so
the caller can always unwrap to text before inserting anything.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import GenerationError

MAX_WORDS = 50
FALLBACK_PHRASE = "Brainrot comment"

_WRAPPING_PAIRS = (
    ('"', '"'),
    ("'", "'"),
    ("`", "`"),
    ("“", "”"),
    ("‘", "’"),
)


def strip_wrapping_quotes(text: str) -> str:
    """Remove one pair of matching quotes that encloses the whole text."""
    for opening, closing in _WRAPPING_PAIRS:
        if len(text) >= 2 and text.startswith(opening) and text.endswith(closing):
            return text[1:-1].strip()
    return text


def truncate_words(text: str, max_words: int = MAX_WORDS) -> str:
    """Split on whitespace and rejoin at most max_words words with single spaces."""
    return " ".join(text.split()[:max_words])


class BrainrotPhrase(BaseModel):
    """
    A generated comment phrase.

    Attributes:
        text: Phrase with normalized whitespace, at most MAX_WORDS words
    """
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Short humorous comment text, no comment delimiters")

    @field_validator('text')
    @classmethod
    def normalize_text(cls, v: str) -> str:
        """Strip wrapping quotes, collapse whitespace and cap the word count."""
        stripped = strip_wrapping_quotes(v.strip())
        normalized = truncate_words(stripped)
        if not normalized:
            raise ValueError("generated phrase is empty")
        return normalized


class GenerationResult(BaseModel):
    """
    Outcome of one generation attempt.

    Exactly one of phrase and error is set.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    phrase: Optional[BrainrotPhrase] = None
    error: Optional[GenerationError] = None

    @classmethod
    def success(cls, phrase: BrainrotPhrase) -> 'GenerationResult':
        return cls(phrase=phrase)

    @classmethod
    def failure(cls, error: GenerationError) -> 'GenerationResult':
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.phrase is not None

    def phrase_or(self, fallback: str = FALLBACK_PHRASE) -> str:
        """Return the generated text, or the fallback if generation failed."""
        return self.phrase.text if self.phrase is not None else fallback
