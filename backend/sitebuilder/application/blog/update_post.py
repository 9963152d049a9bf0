from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from sitebuilder.models.post import Post
from sitebuilder.domain.invariants.post import assert_featured_limit, assert_post
from sitebuilder.domain.layout.sanitize import sanitize_content
from sitebuilder.domain.lifecycle.page import assert_page_transition, status_after_edit
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .queries import count_featured_published, get_post
from .schemas import PostUpdate

CONTENT_FIELDS = {"title", "slug", "excerpt", "content", "cover_image_url", "cover_image_alt", "tags"}


def update_post(
    *,
    post_id: str,
    actor_id: str | None,
    data: Dict[str, Any],
) -> Tuple[Post, bool]:
    """Same draft fallback as pages: editing a live post unpublishes it."""
    post = get_post(post_id)
    payload = PostUpdate.model_validate(data)
    provided = payload.model_fields_set

    content_changed = bool(CONTENT_FIELDS & provided)
    status_before = post.status
    next_status = status_after_edit(
        current=status_before,
        requested=payload.status,
        content_changed=content_changed,
    )

    changed_fields: list[str] = []

    with transactional():
        if next_status != status_before:
            assert_page_transition(from_status=status_before, to_status=next_status)

        for field in ("title", "slug", "excerpt"):
            value = getattr(payload, field)
            if field in provided and value and value != getattr(post, field):
                setattr(post, field, value)
                changed_fields.append(field)

        if "content" in provided and payload.content:
            post.content = sanitize_content(payload.content)
            changed_fields.append("content")

        for field in ("cover_image_url", "cover_image_alt"):
            if field in provided and getattr(payload, field) != getattr(post, field):
                setattr(post, field, getattr(payload, field))
                changed_fields.append(field)

        if "tags" in provided:
            post.tags = [tag.strip() for tag in payload.tags or [] if tag and tag.strip()]
            changed_fields.append("tags")

        if payload.is_featured is not None:
            post.is_featured = payload.is_featured

        post.status = next_status
        if next_status == "published":
            post.published_at = payload.published_at or post.published_at or datetime.now(timezone.utc)
            if post.is_featured:
                assert_featured_limit(featured_published=count_featured_published(exclude_id=post.id))
        elif "published_at" in provided:
            post.published_at = payload.published_at
        elif not (status_before == "published" and content_changed):
            post.published_at = None

        assert_post(post, publish=next_status == "published")

        log_action(
            action="post.update",
            entity_type="post",
            entity_id=post.id,
            actor_id=actor_id,
            payload={"fields": changed_fields, "status": post.status},
        )

    changed_to_draft = status_before == "published" and post.status == "draft"
    return post, changed_to_draft
