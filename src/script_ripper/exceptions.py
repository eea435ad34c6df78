from dataclasses import dataclass


@dataclass(frozen=True)
class ScriptRipperError(Exception):
    """Base exception for errors in the script_ripper module."""


@dataclass(frozen=True)
class DocumentFormatError(ScriptRipperError):
    """Raised when the host document cannot be decoded."""

    reason: str
    message: str = "The input is not a valid pandoc JSON document."


@dataclass(frozen=True)
class UnsupportedApiVersionError(ScriptRipperError):
    """Raised when the pandoc AST uses an API version this filter does not speak."""

    version: tuple[int, ...]
    message: str = "Unsupported pandoc-api-version."
