from sitebuilder.extensions import db
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .queries import get_post


def delete_post(
    *,
    post_id: str,
    actor_id: str | None,
) -> None:
    post = get_post(post_id)

    with transactional():
        slug = post.slug
        db.session.delete(post)

        log_action(
            action="post.delete",
            entity_type="post",
            entity_id=post_id,
            actor_id=actor_id,
            payload={"slug": slug},
        )
