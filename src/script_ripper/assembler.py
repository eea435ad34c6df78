from __future__ import annotations

import io
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from script_ripper.languages import comment_prefix

if TYPE_CHECKING:
    from collections.abc import Sequence

    from script_ripper.settings import RipperSettings

HEADER_FIELDS = ("title", "author", "date", "format")

BLOCK_SEPARATOR = "\n\n"


def stringify(value: Any) -> str:  # noqa: ANN401
    """Flatten a metadata value into a single line of text.

    Args:
        value (Any): a plain-python metadata value

    Returns:
        str: the value as text; lists are comma-joined, mappings give their keys
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        return ", ".join(str(key) for key in value)
    if isinstance(value, list | tuple):
        return ", ".join(stringify(item) for item in value)
    return str(value)


def format_metadata_header(metadata: Mapping[str, Any], language: str) -> str:
    """Render document metadata as a commented header for one language.

    Args:
        metadata (Mapping[str, Any]): the document metadata
        language (str): the script language, which selects the comment prefix

    Returns:
        str: the header lines, each newline-terminated
    """
    comment = comment_prefix(language)
    lines = [f"{comment} ---"]
    lines.extend(
        f"{comment} {field}: {stringify(metadata[field])}"
        for field in HEADER_FIELDS
        if metadata.get(field) is not None
    )
    lines.append(f"{comment} ---")
    lines.append(f"{comment} ")
    return "\n".join(lines) + "\n"


def assemble(
    language: str,
    blocks: Sequence[str],
    metadata: Mapping[str, Any],
    settings: RipperSettings,
) -> str:
    """Build the content of one script file.

    The optional header is followed by a blank line, then the code blocks in
    collected order separated by one blank line. The content always ends with
    exactly one newline.

    Args:
        language (str): the script language
        blocks (Sequence[str]): the code block texts, in document order
        metadata (Mapping[str, Any]): the document metadata
        settings (RipperSettings): the resolved run configuration

    Returns:
        str: the file content
    """
    out = io.StringIO()
    if settings.include_yaml:
        out.write(format_metadata_header(metadata, language))
        out.write("\n")
    out.write(BLOCK_SEPARATOR.join(blocks))
    return out.getvalue().rstrip("\n") + "\n"
