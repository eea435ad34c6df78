"""Decode and encode the pandoc JSON AST used by JSON filters.

Only ``CodeBlock`` and ``Div`` are decoded into nodes; every other block is kept
verbatim as a :class:`~script_ripper.nodes.PassThrough`.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from script_ripper.exceptions import DocumentFormatError, UnsupportedApiVersionError
from script_ripper.nodes import Attr, BulletList, CodeBlock, Div, Document, Heading, Link, Paragraph, PassThrough

if TYPE_CHECKING:
    from collections.abc import Iterator

    from script_ripper.nodes import Block

SUPPORTED_API_MAJOR = 1

_SPACE_ELEMENTS = frozenset({"Space", "SoftBreak", "LineBreak"})
_VERBATIM_INLINES = frozenset({"Code", "Math", "RawInline"})


def stringify(node: Any) -> str:  # noqa: ANN401
    """Concatenate the text of pandoc inlines or blocks, ignoring attributes and notes."""
    return "".join(_text_pieces(node)).strip()


def _text_pieces(node: Any) -> Iterator[str]:  # noqa: ANN401
    if isinstance(node, list):
        for item in node:
            yield from _text_pieces(item)
        return
    if not isinstance(node, dict) or "t" not in node:
        return
    tag = node["t"]
    if tag == "Str":
        yield node["c"]
    elif tag in _SPACE_ELEMENTS:
        yield " "
    elif tag in _VERBATIM_INLINES:
        yield node["c"][-1]
    elif tag == "Note":
        return
    elif tag == "Quoted":
        quote = "'" if node["c"][0].get("t") == "SingleQuote" else '"'
        yield quote
        yield from _text_pieces(node["c"][1])
        yield quote
    elif tag in {"Para", "Plain", "Header"}:
        yield from _text_pieces(node.get("c"))
        yield " "
    else:
        yield from _text_pieces(node.get("c"))


def meta_to_python(value: Any) -> Any:  # noqa: ANN401
    """Convert a pandoc ``Meta*`` value to plain python data.

    Args:
        value (Any): a pandoc meta value

    Returns:
        Any: dicts for MetaMap, lists for MetaList, bools for MetaBool, text otherwise
    """
    if not isinstance(value, dict) or "t" not in value:
        return value
    tag = value["t"]
    content = value.get("c")
    if tag == "MetaMap":
        return {key: meta_to_python(item) for key, item in content.items()}
    if tag == "MetaList":
        return [meta_to_python(item) for item in content]
    if tag == "MetaBool":
        return bool(content)
    if tag == "MetaString":
        return content
    if tag in {"MetaInlines", "MetaBlocks"}:
        return stringify(content)
    return value


def _decode_attr(raw: Any) -> Attr:  # noqa: ANN401
    identifier, classes, attributes = raw
    return Attr(
        identifier=identifier,
        classes=tuple(classes),
        attributes=tuple((key, value) for key, value in attributes),
    )


def _encode_attr(attr: Attr) -> list[Any]:
    return [attr.identifier, list(attr.classes), [[key, value] for key, value in attr.attributes]]


def _nested_code_blocks(node: Any) -> Iterator[CodeBlock]:  # noqa: ANN401
    if isinstance(node, list):
        for item in node:
            yield from _nested_code_blocks(item)
    elif isinstance(node, dict):
        if node.get("t") == "CodeBlock":
            yield _decode_block(node)
        elif "c" in node:
            yield from _nested_code_blocks(node["c"])


def _decode_block(raw: dict[str, Any]) -> Block:
    tag = raw.get("t")
    if tag == "CodeBlock":
        attr, text = raw["c"]
        return CodeBlock(attr=_decode_attr(attr), text=text)
    if tag == "Div":
        attr, blocks = raw["c"]
        return Div(attr=_decode_attr(attr), blocks=[_decode_block(block) for block in blocks])
    return PassThrough(payload=raw, code_blocks=tuple(_nested_code_blocks(raw.get("c"))))


def _text_inlines(text: str) -> list[dict[str, Any]]:
    inlines: list[dict[str, Any]] = []
    for word in text.split(" "):
        if not word:
            continue
        if inlines:
            inlines.append({"t": "Space"})
        inlines.append({"t": "Str", "c": word})
    return inlines


def _encode_link(link: Link) -> dict[str, Any]:
    return {"t": "Link", "c": [_encode_attr(Attr()), _text_inlines(link.text), [link.target, ""]]}


def _encode_block(block: Block) -> dict[str, Any]:
    if isinstance(block, PassThrough):
        return block.payload
    if isinstance(block, CodeBlock):
        return {"t": "CodeBlock", "c": [_encode_attr(block.attr), block.text]}
    if isinstance(block, Div):
        return {"t": "Div", "c": [_encode_attr(block.attr), [_encode_block(child) for child in block.blocks]]}
    if isinstance(block, Heading):
        return {"t": "Header", "c": [block.level, _encode_attr(block.attr), _text_inlines(block.text)]}
    if isinstance(block, Paragraph):
        return {"t": "Para", "c": _text_inlines(block.text)}
    if isinstance(block, BulletList):
        return {"t": "BulletList", "c": [[{"t": "Plain", "c": [_encode_link(link)]}] for link in block.items]}
    msg = f"cannot encode {type(block).__name__}"
    raise TypeError(msg)


def read_document(text: str | bytes) -> Document:
    """Parse a pandoc JSON AST.

    Args:
        text (str | bytes): the JSON document as produced by ``pandoc -t json``

    Raises:
        DocumentFormatError: if the input is not a pandoc JSON document.
        UnsupportedApiVersionError: if the AST major version is not supported.

    Returns:
        Document: the decoded document
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentFormatError(reason=str(e)) from e

    if not isinstance(raw, dict) or "blocks" not in raw:
        raise DocumentFormatError(reason="missing 'blocks'; pandoc older than 1.18 is not supported")

    version = tuple(raw.get("pandoc-api-version") or ())
    if not version or version[0] != SUPPORTED_API_MAJOR:
        raise UnsupportedApiVersionError(version=version)

    host_meta = raw.get("meta") or {}
    try:
        meta = {key: meta_to_python(value) for key, value in host_meta.items()}
        blocks = [_decode_block(block) for block in raw["blocks"]]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise DocumentFormatError(reason=str(e)) from e

    return Document(meta=meta, host_meta=host_meta, blocks=blocks, api_version=version)


def write_document(document: Document) -> str:
    """Serialize a document back to pandoc JSON; metadata is emitted as received."""
    out = {
        "pandoc-api-version": list(document.api_version),
        "meta": document.host_meta,
        "blocks": [_encode_block(block) for block in document.blocks],
    }
    return json.dumps(out, ensure_ascii=False)
