from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_COMMENT_PREFIX = "#'"


class LanguageSpec(BaseModel):
    """Output conventions for one supported script language.

    Attributes:
        id: Language identifier as found on a fenced code block (e.g. "python").
        extension: File extension of the generated script, including the dot.
        comment_prefix: Prefix used for the commented metadata header lines.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Code block language identifier")
    extension: str = Field(..., description="Script file extension, e.g. '.py'")
    comment_prefix: str = Field(DEFAULT_COMMENT_PREFIX, description="Header comment prefix")


def _spec(id_: str, extension: str, comment_prefix: str) -> tuple[str, LanguageSpec]:
    return id_, LanguageSpec(id=id_, extension=extension, comment_prefix=comment_prefix)


LANGUAGES: dict[str, LanguageSpec] = dict(
    [
        _spec("r", ".R", "#'"),
        _spec("python", ".py", "#'"),
        _spec("julia", ".jl", "#'"),
        _spec("bash", ".sh", "#'"),
        _spec("javascript", ".js", "//'"),
        _spec("typescript", ".ts", "//'"),
        _spec("sql", ".sql", "--'"),
        _spec("rust", ".rs", "//'"),
        _spec("go", ".go", "//'"),
        _spec("cpp", ".cpp", "//'"),
        _spec("c", ".c", "//'"),
        _spec("java", ".java", "//'"),
        _spec("scala", ".scala", "//'"),
        _spec("ruby", ".rb", "#'"),
        _spec("perl", ".pl", "#'"),
        _spec("php", ".php", "//'"),
    ],
)


def lookup(language: str | None) -> LanguageSpec | None:
    """Return the registered LanguageSpec for a language identifier.

    Matching is exact: "Python" or "py" are not script languages.

    Args:
        language (str | None): the code block language identifier

    Returns:
        LanguageSpec | None: the language spec, or None for unsupported languages
    """
    if not language:
        return None
    return LANGUAGES.get(language)


def is_script_language(language: str | None) -> bool:
    """Check whether code blocks of this language are extracted at all."""
    return lookup(language) is not None


def comment_prefix(language: str) -> str:
    """Get the header comment prefix for a language, defaulting to R/Python style."""
    spec = lookup(language)
    return spec.comment_prefix if spec else DEFAULT_COMMENT_PREFIX
