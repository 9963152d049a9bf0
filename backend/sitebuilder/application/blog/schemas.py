"""Request payloads for the blog use cases."""
from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import BeforeValidator, Field, StringConstraints, field_validator

from sitebuilder.application.cms.schemas import RequestModel, Slug

PostTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3)]
Excerpt = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]
Content = Annotated[str, StringConstraints(min_length=10)]


def _split_ids(value):
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class PostInput(RequestModel):
    title: PostTitle
    slug: Slug
    excerpt: Excerpt
    content: Content
    cover_image_url: Optional[str] = None
    cover_image_alt: Optional[str] = None
    status: Literal["draft", "published"] = "draft"
    published_at: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)
    is_featured: bool = False

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, value):
        return [tag.strip() for tag in value if tag and tag.strip()]


class PostUpdate(RequestModel):
    title: Optional[PostTitle] = None
    slug: Optional[Slug] = None
    excerpt: Optional[Excerpt] = None
    content: Optional[Content] = None
    cover_image_url: Optional[str] = None
    cover_image_alt: Optional[str] = None
    status: Optional[Literal["draft", "published"]] = None
    published_at: Optional[datetime] = None
    tags: Optional[List[str]] = None
    is_featured: Optional[bool] = None


class PostFilters(RequestModel):
    search: Optional[str] = None
    limit: Annotated[int, Field(ge=1, le=50)] = 9
    offset: Annotated[int, Field(ge=0)] = 0
    exclude_ids: Annotated[List[str], BeforeValidator(_split_ids)] = Field(default_factory=list)
