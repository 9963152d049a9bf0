from datetime import datetime, timezone
from typing import Any, Dict

from sitebuilder.extensions import db
from sitebuilder.models.post import Post
from sitebuilder.domain.invariants.post import assert_featured_limit, assert_post
from sitebuilder.domain.layout.sanitize import sanitize_content
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .queries import count_featured_published
from .schemas import PostInput


def create_post(
    *,
    actor_id: str | None,
    data: Dict[str, Any],
) -> Post:
    """
    Create a blog post.

    Drafts may be flagged as featured; the three-highlight limit only
    counts published posts.
    """
    payload = PostInput.model_validate(data)

    post = Post()
    post.title = payload.title
    post.slug = payload.slug
    post.excerpt = payload.excerpt
    post.content = sanitize_content(payload.content)
    post.cover_image_url = payload.cover_image_url
    post.cover_image_alt = payload.cover_image_alt
    post.tags = payload.tags
    post.is_featured = payload.is_featured
    post.status = payload.status
    if payload.status == "published":
        post.published_at = payload.published_at or datetime.now(timezone.utc)

    with transactional():
        if post.is_featured and post.status == "published":
            assert_featured_limit(featured_published=count_featured_published())
        assert_post(post, publish=post.status == "published")

        db.session.add(post)
        db.session.flush()

        log_action(
            action="post.create",
            entity_type="post",
            entity_id=post.id,
            actor_id=actor_id,
            payload={"slug": post.slug, "status": post.status},
        )

    return post
