"""Request payloads accepted by the page use cases (camelCase or snake_case keys)."""
from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel


def _clean_slug(value):
    return value.strip().lower() if isinstance(value, str) else value


# Cleaned before the pattern check runs
Slug = Annotated[
    str,
    StringConstraints(min_length=2, pattern=r"^[a-z0-9-]+$"),
    BeforeValidator(_clean_slug),
]
Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]

DEFAULT_LAYOUT = {"version": 1, "columns": 1, "cols": []}


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PageInput(RequestModel):
    slug: Slug
    page_key: Optional[str] = None
    title: Title
    description: Optional[str] = None
    layout: Any = Field(default_factory=lambda: dict(DEFAULT_LAYOUT))
    status: Literal["draft", "published"] = "draft"
    published_at: Optional[datetime] = None


class PageUpdate(RequestModel):
    slug: Optional[Slug] = None
    page_key: Optional[str] = None
    title: Optional[Title] = None
    description: Optional[str] = None
    layout: Any = None
    status: Optional[Literal["draft", "published"]] = None
    published_at: Optional[datetime] = None


class HomeUpdate(RequestModel):
    title: Optional[Title] = None
    description: Optional[str] = None
    layout: Any = None


# -------------------------------------------------
# Layout editor operations
# -------------------------------------------------
ColumnIndex = Annotated[int, Field(ge=0, le=2)]
Direction = Literal["up", "down"]


class AddSection(RequestModel):
    op: Literal["add_section"]
    columns: Annotated[int, Field(ge=1, le=3)] = 2
    index: Optional[Annotated[int, Field(ge=0)]] = None


class RemoveSection(RequestModel):
    op: Literal["remove_section"]
    section_id: str


class MoveSection(RequestModel):
    op: Literal["move_section"]
    section_id: str
    direction: Direction


class DuplicateSection(RequestModel):
    op: Literal["duplicate_section"]
    section_id: str


class ChangeSectionColumns(RequestModel):
    op: Literal["change_section_columns"]
    section_id: str
    columns: Annotated[int, Field(ge=1, le=3)]


class AddBlock(RequestModel):
    op: Literal["add_block"]
    section_id: str
    column_index: ColumnIndex = 0
    block: dict
    insert_index: Optional[Annotated[int, Field(ge=0)]] = None
    placement: Literal["insert", "place"] = "insert"


class UpdateBlock(RequestModel):
    op: Literal["update_block"]
    block_id: str
    block: dict


class RemoveBlock(RequestModel):
    op: Literal["remove_block"]
    block_id: str


class MoveBlock(RequestModel):
    op: Literal["move_block"]
    block_id: str
    direction: Direction


class MoveBlockToColumn(RequestModel):
    op: Literal["move_block_to_column"]
    block_id: str
    to_column: ColumnIndex


class DuplicateBlock(RequestModel):
    op: Literal["duplicate_block"]
    block_id: str


LayoutOperation = Annotated[
    Union[
        AddSection,
        RemoveSection,
        MoveSection,
        DuplicateSection,
        ChangeSectionColumns,
        AddBlock,
        UpdateBlock,
        RemoveBlock,
        MoveBlock,
        MoveBlockToColumn,
        DuplicateBlock,
    ],
    Field(discriminator="op"),
]
