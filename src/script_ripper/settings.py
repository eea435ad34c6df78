from __future__ import annotations

import os
from collections.abc import Mapping
from enum import StrEnum, auto
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from script_ripper.logging import logger

ENV_FILE = find_dotenv(usecwd=True)

ENV_PREFIX = "SCRIPT_RIPPER_"

SETTINGS_NAMESPACE = ("extensions", "ripper")


class SectionPosition(StrEnum):
    """Where the generated script-links section goes in the document."""

    TOP = auto()
    BOTTOM = auto()
    CUSTOM = auto()
    NONE = auto()


class RipperSettings(BaseModel):
    """Per-document configuration, read from the document metadata."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    include_yaml: bool = Field(
        default=True,
        alias="include-yaml",
        description="Prepend a commented metadata header to each script.",
    )
    script_links_position: SectionPosition = Field(
        default=SectionPosition.BOTTOM,
        alias="script-links-position",
        description="Placement of the links section: top, bottom, custom or none.",
    )
    output_name: str | None = Field(
        default=None,
        alias="output-name",
        min_length=1,
        description="Base name of the generated scripts; derived from the output file if unset.",
    )
    debug: bool = Field(default=False, alias="debug", description="Verbose logging for this run.")

    @field_validator("script_links_position", mode="before")
    @classmethod
    def _normalize_position(cls, value: Any) -> Any:  # noqa: ANN401
        if isinstance(value, SectionPosition):
            return value
        return str(value).strip().lower()

    @field_validator("output_name", mode="before")
    @classmethod
    def _stringify_name(cls, value: Any) -> Any:  # noqa: ANN401
        if value is None:
            return None
        return str(value)


def _options_block(metadata: Mapping[str, Any]) -> Mapping[str, Any]:
    node: Any = metadata
    for key in SETTINGS_NAMESPACE:
        node = node.get(key) if isinstance(node, Mapping) else None
    if isinstance(node, Mapping):
        return node
    # Quarto also accepts filter options at the top level of the front matter.
    fallback = metadata.get(SETTINGS_NAMESPACE[-1])
    return fallback if isinstance(fallback, Mapping) else {}


def resolve_settings(metadata: Mapping[str, Any] | None) -> RipperSettings:
    """Resolve the run configuration from document metadata.

    Only keys that are present and not None override a default, so an explicit
    ``false`` wins over a ``true`` default. A malformed value falls back to its
    default and is logged; it never aborts the run.

    Args:
        metadata (Mapping[str, Any] | None): the plain-python document metadata

    Returns:
        RipperSettings: the resolved, immutable settings
    """
    if not metadata:
        return RipperSettings()

    aliases = {name: field.alias or name for name, field in RipperSettings.model_fields.items()}
    options = {
        key: value for key, value in _options_block(metadata).items() if key in aliases.values() and value is not None
    }

    try:
        return RipperSettings.model_validate(options)
    except ValidationError as err:
        for error in err.errors():
            loc = str(error["loc"][0]) if error["loc"] else ""
            key = aliases.get(loc, loc)
            if key in options:
                logger.warning("invalid_setting", key=key, value=str(options.pop(key)), reason=error["msg"])
    return RipperSettings.model_validate(options)


class HostSettings(BaseModel):
    """Settings handed over by the host process through the environment."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    output_file: Path | None = Field(default=None, description="Rendered output file, used to name scripts.")
    log_file: Path | None = Field(default=None, description="Log file path; stderr when unset.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> HostSettings:
        """Read ``SCRIPT_RIPPER_*`` variables, loading a ``.env`` file first when one exists."""
        if environ is None:
            if ENV_FILE:
                load_dotenv(ENV_FILE, override=False)
            environ = os.environ
        return cls(
            output_file=environ.get(f"{ENV_PREFIX}OUTPUT_FILE") or None,
            log_file=environ.get(f"{ENV_PREFIX}LOG_FILE") or None,
        )
