"""Document tree models: inline nodes, blocks, and the parse result"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Node(BaseModel):
    """Immutable base for every tree node; serializes with camelCase aliases."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class TextStyle(str, Enum):
    """Restrict inline runs to the supported styles"""
    plain = "plain"
    strong = "strong"
    italic = "italic"
    code = "code"


class TextBody(Node):
    """A run of text carrying a single style."""
    type: Literal["textBody"] = "textBody"
    style: TextStyle
    value: str


class Link(Node):
    """A link; its body holds styled text only, never another link."""
    type: Literal["link"] = "link"
    url: str
    body: list[TextBody]


Inline = Annotated[Union[TextBody, Link], Field(discriminator="type")]


class HeadingBlock(Node):
    type:  Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=6)
    body:  list[Inline]


class QuoteBlock(Node):
    type: Literal["quote"] = "quote"
    body: list[Inline]


class ListItem(Node):
    type: Literal["listItem"] = "listItem"
    body: list[Inline]


class ListBlock(Node):
    type:    Literal["list"] = "list"
    ordered: bool
    items:   list[ListItem]


class ImageBlock(Node):
    type:     Literal["image"] = "image"
    url:      str
    alt_text: str = ""
    caption:  str = ""


class CodeBlock(Node):
    type: Literal["code"] = "code"
    lang: Optional[str] = None      # None when the fence carries no language tag
    body: str


class ThematicBreakBlock(Node):
    type: Literal["thematicBreak"] = "thematicBreak"


class ParagraphBlock(Node):
    type: Literal["paragraph"] = "paragraph"
    body: list[Inline]


class CustomBlock(Node):
    """A caller-defined block; any extra fields are kept as its payload."""
    model_config = ConfigDict(extra="allow")
    type:        Literal["custom"] = "custom"
    custom_type: str


Block = Annotated[
    Union[
        HeadingBlock,
        QuoteBlock,
        ListBlock,
        ImageBlock,
        CodeBlock,
        ThematicBreakBlock,
        ParagraphBlock,
        CustomBlock,
    ],
    Field(discriminator="type"),
]

BLOCK_TYPES = (
    HeadingBlock,
    QuoteBlock,
    ListBlock,
    ImageBlock,
    CodeBlock,
    ThematicBreakBlock,
    ParagraphBlock,
    CustomBlock,
)


class Document(Node):
    """Result of a single parse: frontmatter plus the ordered block list."""
    frontmatter: dict[str, str] = Field(default_factory=dict)
    blocks:      list[Block] = Field(default_factory=list)
