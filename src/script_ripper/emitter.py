from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from script_ripper.languages import lookup
from script_ripper.logging import logger

DEFAULT_BASE_NAME = "output"


class EmittedFile(BaseModel):
    """A script file that was written successfully."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., description="Path of the written script, as base name + extension")
    language: str = Field(..., description="Language whose blocks the file holds")


class EmissionFailure(BaseModel):
    """A script file that could not be written."""

    model_config = ConfigDict(frozen=True)

    filename: str
    language: str
    reason: str


def derive_base_name(output_file: str | Path | None) -> str:
    """Strip the extension from the host output file, keeping its directory.

    Args:
        output_file (str | Path | None): the rendered document path, if known

    Returns:
        str: the base name for generated scripts, "output" when there is no hint
    """
    if not output_file:
        return DEFAULT_BASE_NAME
    return str(Path(output_file).with_suffix(""))


def emit(base_name: str, language: str, content: str) -> EmittedFile | EmissionFailure:
    """Write one script file, overwriting any existing file.

    A failed write is logged and reported, never raised, so the remaining
    languages are still attempted.

    Args:
        base_name (str): the script path without extension
        language (str): a registered script language
        content (str): the assembled file content

    Returns:
        EmittedFile | EmissionFailure: the outcome of the write
    """
    spec = lookup(language)
    if spec is None:
        return EmissionFailure(filename=base_name, language=language, reason="unsupported language")

    filename = f"{base_name}{spec.extension}"
    try:
        data = content.encode("utf-8")
        Path(filename).write_bytes(data)
    except (OSError, ValueError) as e:
        logger.error("script_file_failed", filename=filename, language=language, error=str(e))  # noqa: TRY400
        return EmissionFailure(filename=filename, language=language, reason=str(e))

    logger.info("script_file_created", filename=filename, language=language)
    return EmittedFile(filename=filename, language=language)
