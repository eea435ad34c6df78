"""Block-level document nodes exchanged with the host renderer.

Only the node kinds the filter reads or builds are modelled. Anything else is
carried as a :class:`PassThrough` holding the host's own representation, so a
document survives a decode/encode cycle untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Iterator


class Attr(BaseModel):
    """Identifier, classes and key/value attributes of a node."""

    model_config = ConfigDict(frozen=True)

    identifier: str = ""
    classes: tuple[str, ...] = ()
    attributes: tuple[tuple[str, str], ...] = ()


class CodeBlock(BaseModel):
    """Fenced code; the first class is the language."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["code_block"] = "code_block"
    attr: Attr = Field(default_factory=Attr)
    text: str = ""

    @property
    def language(self) -> str | None:
        return self.attr.classes[0] if self.attr.classes else None


class Heading(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["heading"] = "heading"
    level: int = Field(1, ge=1, le=6)
    attr: Attr = Field(default_factory=Attr)
    text: str = ""


class Paragraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["paragraph"] = "paragraph"
    text: str = ""


class Link(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    target: str


class BulletList(BaseModel):
    """Bullet list whose items are single links."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bullet_list"] = "bullet_list"
    items: tuple[Link, ...] = ()


class Div(BaseModel):
    """Generic container, also used as the custom placement marker."""

    kind: Literal["div"] = "div"
    attr: Attr = Field(default_factory=Attr)
    blocks: list[Block] = Field(default_factory=list)


class PassThrough(BaseModel):
    """A host node the filter does not interpret.

    Attributes:
        payload: The node exactly as the host encoded it.
        code_blocks: Code blocks nested anywhere inside the node, in document order.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["pass_through"] = "pass_through"
    payload: Any = None
    code_blocks: tuple[CodeBlock, ...] = ()


Block = Annotated[
    CodeBlock | Heading | Paragraph | BulletList | Div | PassThrough,
    Field(discriminator="kind"),
]

Div.model_rebuild()


class Document(BaseModel):
    """A parsed document: plain-python metadata plus a mutable block sequence."""

    meta: dict[str, Any] = Field(default_factory=dict)
    host_meta: dict[str, Any] = Field(default_factory=dict, description="Metadata as the host encoded it")
    blocks: list[Block] = Field(default_factory=list)
    api_version: tuple[int, ...] = ()

    def iter_code_blocks(self) -> Iterator[CodeBlock]:
        """Yield every code block in document order, including nested ones."""
        yield from _iter_code_blocks(self.blocks)


def _iter_code_blocks(blocks: list[Block]) -> Iterator[CodeBlock]:
    for block in blocks:
        if isinstance(block, CodeBlock):
            yield block
        elif isinstance(block, Div):
            yield from _iter_code_blocks(block.blocks)
        elif isinstance(block, PassThrough):
            yield from block.code_blocks
