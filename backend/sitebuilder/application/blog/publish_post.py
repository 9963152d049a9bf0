from datetime import datetime, timezone

from sitebuilder.models.post import Post
from sitebuilder.domain.invariants.post import assert_featured_limit, assert_post
from sitebuilder.domain.lifecycle.page import assert_page_transition
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .queries import count_featured_published, get_post


def publish_post(
    *,
    post_id: str,
    actor_id: str | None,
) -> Post:
    post = get_post(post_id)

    with transactional():
        assert_page_transition(from_status=post.status, to_status="published")
        if post.is_featured:
            assert_featured_limit(featured_published=count_featured_published(exclude_id=post.id))

        post.status = "published"
        post.published_at = datetime.now(timezone.utc)

        assert_post(post, publish=True)

        log_action(
            action="post.publish",
            entity_type="post",
            entity_id=post.id,
            actor_id=actor_id,
            payload={"published_at": post.published_at.isoformat()},
        )

    return post
