"""Read Markdown/Quarto sources into a :class:`~script_ripper.nodes.Document`.

Uses ``markdown-it-py`` to find fenced code blocks; only those are kept.
YAML front matter becomes the document metadata.
"""

from __future__ import annotations

import re
from typing import Any

import yaml
from markdown_it import MarkdownIt

from script_ripper.nodes import Attr, CodeBlock, Document

_FRONT_MATTER = re.compile(r"\A---[ \t]*\r?\n(.*?\r?\n)?(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a leading YAML front matter block from the body.

    Args:
        text (str): the full source text

    Returns:
        tuple[dict[str, Any], str]: the parsed metadata (empty if none) and the remaining body
    """
    match = _FRONT_MATTER.match(text)
    if not match:
        return {}, text
    try:
        meta = yaml.safe_load(match.group(1) or "") or {}
    except yaml.YAMLError:
        return {}, text
    if not isinstance(meta, dict):
        return {}, text
    return meta, text[match.end() :]


def fence_language(info: str) -> str | None:
    """Extract the language from a fence info string: ``python``, ``{r}``, ``{.python echo=false}``."""
    info = info.strip().strip("{}").strip()
    if not info:
        return None
    word = re.split(r"[\s,]", info, maxsplit=1)[0]
    return word.lstrip(".") or None


def read_markdown(text: str) -> Document:
    """Parse Markdown into a document holding only its fenced code blocks."""
    meta, body = split_front_matter(text)
    blocks: list[CodeBlock] = []
    for token in MarkdownIt().parse(body):
        if token.type != "fence":
            continue
        language = fence_language(token.info)
        attr = Attr(classes=(language,)) if language else Attr()
        blocks.append(CodeBlock(attr=attr, text=token.content.removesuffix("\n")))
    return Document(meta=meta, blocks=blocks)
