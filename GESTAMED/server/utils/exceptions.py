from __future__ import annotations


###############################################################################
class GestamedError(Exception):
    """Base exception for all drug compatibility errors."""


###############################################################################
class ConfigurationError(GestamedError):
    """Settings file exists but cannot be read or parsed."""


###############################################################################
class LexiconError(GestamedError):
    """Drug lexicon is missing or violates its structural invariants."""


###############################################################################
class NotFoundError(GestamedError, KeyError):
    """Drug key is not part of the lexicon."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Drug '{self.key}' is not defined in the lexicon"


###############################################################################
class InvalidTrimesterError(GestamedError, ValueError):
    """Requested trimester is not one of the recognized identifiers."""

    def __init__(self, value: object, allowed: tuple[str, ...]) -> None:
        super().__init__(
            f"Invalid trimester {value!r}; expected one of: {', '.join(allowed)}"
        )
        self.value = value
        self.allowed = allowed


###############################################################################
class DocumentParseError(GestamedError):
    """Uploaded document could not be converted to plain text."""
