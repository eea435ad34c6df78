import pytest
from structlog.testing import capture_logs

from script_ripper.emitter import EmittedFile
from script_ripper.nodes import Attr, BulletList, Div, Document, Heading, Paragraph, PassThrough
from script_ripper.section import (
    LINKS_MARKER_ID,
    SECTION_DESCRIPTION,
    build_section,
    is_slide_format,
    place_section,
)
from script_ripper.settings import SectionPosition

EMITTED = [EmittedFile(filename="doc.py", language="python"), EmittedFile(filename="doc.R", language="r")]


def _document() -> Document:
    return Document(blocks=[PassThrough(payload={"t": "HorizontalRule"}), Paragraph(text="body")])


@pytest.mark.unit
@pytest.mark.parametrize(
    ("target", "expected"),
    [("revealjs", True), ("beamer+smart", True), ("pptx", True), ("html", False), ("", False), (None, False)],
)
def test_is_slide_format(target: str | None, expected: bool) -> None:
    assert is_slide_format(target) is expected


@pytest.mark.unit
def test_build_section_for_documents() -> None:
    section = build_section(EMITTED, slide_format=False)

    assert section is not None
    heading, description, links = section
    assert heading == Heading(level=1, text="Script files")
    assert description == Paragraph(text=SECTION_DESCRIPTION)
    assert isinstance(links, BulletList)
    assert [(link.text, link.target) for link in links.items] == [("doc.py", "doc.py"), ("doc.R", "doc.R")]


@pytest.mark.unit
def test_build_section_for_slides_uses_single_file_title() -> None:
    section = build_section(EMITTED[:1], slide_format=True)

    assert section is not None
    assert section[0] == Heading(level=2, attr=Attr(classes=("scrollable",)), text="Script file")


@pytest.mark.unit
def test_build_section_absent_for_none_or_empty() -> None:
    assert build_section(EMITTED, slide_format=False, position=SectionPosition.NONE) is None
    assert build_section([], slide_format=False) is None


@pytest.mark.unit
def test_place_top_and_bottom() -> None:
    section = build_section(EMITTED, slide_format=False)
    assert section is not None

    top = _document()
    place_section(top, section, SectionPosition.TOP)
    bottom = _document()
    place_section(bottom, section, SectionPosition.BOTTOM)

    assert top.blocks[:3] == section
    assert top.blocks[3:] == _document().blocks
    assert bottom.blocks[-3:] == section
    assert isinstance(bottom.blocks[-1], BulletList)


@pytest.mark.unit
def test_place_custom_replaces_marker() -> None:
    section = build_section(EMITTED, slide_format=False)
    assert section is not None
    marker = Div(attr=Attr(identifier=LINKS_MARKER_ID))
    doc = Document(blocks=[Paragraph(text="intro"), marker, Paragraph(text="outro")])

    place_section(doc, section, SectionPosition.CUSTOM)

    assert doc.blocks == [Paragraph(text="intro"), *section, Paragraph(text="outro")]
    assert marker not in doc.blocks


@pytest.mark.unit
def test_place_custom_without_marker_falls_back_to_top() -> None:
    section = build_section(EMITTED, slide_format=False)
    assert section is not None
    expected = _document()
    place_section(expected, section, SectionPosition.TOP)
    doc = _document()

    with capture_logs() as logs:
        place_section(doc, section, SectionPosition.CUSTOM)

    assert doc.blocks == expected.blocks
    assert any(log["event"] == "links_marker_missing" and log["log_level"] == "warning" for log in logs)
