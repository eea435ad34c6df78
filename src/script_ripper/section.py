from __future__ import annotations

import re
from typing import TYPE_CHECKING

from script_ripper.logging import logger
from script_ripper.nodes import Attr, Block, BulletList, Div, Heading, Link, Paragraph
from script_ripper.settings import SectionPosition

if TYPE_CHECKING:
    from collections.abc import Sequence

    from script_ripper.emitter import EmittedFile
    from script_ripper.nodes import Document

LINKS_MARKER_ID = "ripper-links"

SECTION_DESCRIPTION = "The code in this document has been extracted to the following files:"

SLIDE_FORMATS = frozenset({"revealjs", "beamer", "pptx", "slidy", "slideous", "dzslides", "s5"})

SLIDE_HEADING_CLASS = "scrollable"

_FORMAT_EXTENSIONS = re.compile(r"[+-].*$")


def is_slide_format(target_format: str | None) -> bool:
    """Check whether the render target is a presentation format.

    Pandoc extension suffixes such as ``revealjs+smart`` are ignored.
    """
    if not target_format:
        return False
    return _FORMAT_EXTENSIONS.sub("", target_format.strip().lower()) in SLIDE_FORMATS


def build_section(
    emitted: Sequence[EmittedFile],
    *,
    slide_format: bool,
    position: SectionPosition = SectionPosition.BOTTOM,
) -> list[Block] | None:
    """Build the heading, description and link list pointing at the scripts.

    Args:
        emitted (Sequence[EmittedFile]): the successfully written scripts, in emission order
        slide_format (bool): whether the document renders to slides
        position (SectionPosition): the configured placement

    Returns:
        list[Block] | None: the section blocks, or None when there is nothing to insert
    """
    if position is SectionPosition.NONE or not emitted:
        return None

    title = "Script file" if len(emitted) == 1 else "Script files"
    if slide_format:
        heading = Heading(level=2, attr=Attr(classes=(SLIDE_HEADING_CLASS,)), text=title)
    else:
        heading = Heading(level=1, text=title)

    links = BulletList(items=tuple(Link(text=f.filename, target=f.filename) for f in emitted))
    return [heading, Paragraph(text=SECTION_DESCRIPTION), links]


def find_marker(blocks: Sequence[Block]) -> int | None:
    """Return the index of the top-level links marker container, if any."""
    for index, block in enumerate(blocks):
        if isinstance(block, Div) and block.attr.identifier == LINKS_MARKER_ID:
            return index
    return None


def place_section(document: Document, section: Sequence[Block], position: SectionPosition) -> None:
    """Splice the section into the document blocks, in place.

    A custom position replaces the marker container; without a marker the
    section goes to the top. Meant to run once per document.

    Args:
        document (Document): the document to mutate
        section (Sequence[Block]): the blocks built by :func:`build_section`
        position (SectionPosition): the configured placement
    """
    blocks = document.blocks
    if position is SectionPosition.NONE:
        return
    if position is SectionPosition.BOTTOM:
        blocks.extend(section)
        logger.debug("section_placed", position=str(position))
        return

    if position is SectionPosition.CUSTOM:
        index = find_marker(blocks)
        if index is not None:
            blocks[index : index + 1] = list(section)
            logger.debug("section_placed", position=str(position), index=index)
            return
        logger.warning("links_marker_missing", marker=LINKS_MARKER_ID, fallback=str(SectionPosition.TOP))

    blocks[0:0] = list(section)
    logger.debug("section_placed", position=str(SectionPosition.TOP))
