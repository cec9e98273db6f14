"""Unified data models for parsed MDX documentation.

Every component parser converts its tag into one of these node models.
Container nodes own fully parsed child lists; nothing is lazy and the tree
is never mutated after construction.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from mdx_docs.openapi.base import OpenApiSpec


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class DocFrontmatter(_Node):
    """YAML metadata at the top of a page."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""  # empty means untitled
    description: str | None = None
    sidebar_title: str | None = Field(default=None, alias="sidebarTitle")
    icon: str | None = None


class CalloutType(str, Enum):
    TIP = "Tip"
    NOTE = "Note"
    WARNING = "Warning"
    INFO = "Info"


class ParamLocation(str, Enum):
    HEADER = "header"
    PATH = "path"
    QUERY = "query"
    BODY = "body"


class MarkdownNode(_Node):
    kind: Literal["markdown"] = "markdown"
    text: str


class CalloutNode(_Node):
    kind: Literal["callout"] = "callout"
    callout_type: CalloutType
    content: str  # raw markdown, not parsed for components


class CardNode(_Node):
    kind: Literal["card"] = "card"
    title: str = ""
    icon: str | None = None
    href: str | None = None
    content: str = ""


class CardGroupNode(_Node):
    kind: Literal["card_group"] = "card_group"
    cols: int
    cards: list[CardNode]


class TabNode(_Node):
    title: str
    content: list["DocNode"]


class TabsNode(_Node):
    kind: Literal["tabs"] = "tabs"
    tabs: list[TabNode]


class StepNode(_Node):
    title: str
    content: list["DocNode"]


class StepsNode(_Node):
    kind: Literal["steps"] = "steps"
    steps: list[StepNode]


class AccordionNode(_Node):
    title: str
    icon: str | None = None
    content: list["DocNode"]


class AccordionGroupNode(_Node):
    kind: Literal["accordion_group"] = "accordion_group"
    items: list[AccordionNode]


class CodeBlockNode(_Node):
    kind: Literal["code_block"] = "code_block"
    language: str | None = None
    filename: str | None = None
    code: str


class CodeGroupNode(_Node):
    kind: Literal["code_group"] = "code_group"
    blocks: list[CodeBlockNode]


class ParamFieldNode(_Node):
    """An API parameter documented with ``<ParamField>``."""

    kind: Literal["param_field"] = "param_field"
    name: str
    location: ParamLocation
    param_type: str = "string"
    required: bool = False
    default: str | None = None
    content: list["DocNode"] = []


class ResponseFieldNode(_Node):
    """A response field; its body is plain text plus an optional Expandable."""

    kind: Literal["response_field"] = "response_field"
    name: str
    field_type: str = "any"
    required: bool = False
    content: str = ""
    expandable: "ExpandableNode | None" = None


class ExpandableNode(_Node):
    kind: Literal["expandable"] = "expandable"
    title: str
    fields: list[ResponseFieldNode]


class RequestExampleNode(_Node):
    kind: Literal["request_example"] = "request_example"
    blocks: list[CodeBlockNode]


class ResponseExampleNode(_Node):
    kind: Literal["response_example"] = "response_example"
    blocks: list[CodeBlockNode]


class UpdateNode(_Node):
    """A changelog entry."""

    kind: Literal["update"] = "update"
    label: str  # e.g. "v0.9.0"
    description: str = ""  # e.g. "December 2025"
    content: list["DocNode"]


class OpenApiNode(_Node):
    kind: Literal["openapi"] = "openapi"
    spec: OpenApiSpec
    tags: list[str] | None = None  # only show operations with these tags
    show_schemas: bool = True


DocNode = Annotated[
    Union[
        MarkdownNode,
        CalloutNode,
        CardNode,
        CardGroupNode,
        TabsNode,
        StepsNode,
        AccordionGroupNode,
        CodeBlockNode,
        CodeGroupNode,
        ParamFieldNode,
        ResponseFieldNode,
        ExpandableNode,
        RequestExampleNode,
        ResponseExampleNode,
        UpdateNode,
        OpenApiNode,
    ],
    Field(discriminator="kind"),
]

for _model in (
    TabNode,
    TabsNode,
    StepNode,
    StepsNode,
    AccordionNode,
    AccordionGroupNode,
    ParamFieldNode,
    ResponseFieldNode,
    ExpandableNode,
    UpdateNode,
):
    _model.model_rebuild()


class ParsedDoc(_Node):
    """A parsed page: frontmatter, node tree and a flattened markdown copy."""

    frontmatter: DocFrontmatter
    content: list[DocNode]
    raw_markdown: str
