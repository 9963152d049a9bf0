from sitebuilder.models.post import Post
from sitebuilder.domain.lifecycle.page import assert_page_transition
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .queries import get_post


def unpublish_post(
    *,
    post_id: str,
    actor_id: str | None,
) -> Post:
    """Back to draft; the featured flag is kept for the next publish."""
    post = get_post(post_id)

    with transactional():
        assert_page_transition(from_status=post.status, to_status="draft")

        post.status = "draft"
        post.published_at = None

        log_action(
            action="post.unpublish",
            entity_type="post",
            entity_id=post.id,
            actor_id=actor_id,
        )

    return post
