from sitebuilder.extensions import db
from sitebuilder.models.post import Post
from sitebuilder.utils.transaction import transactional
from .queries import get_published_by_id


def record_view(post_id: str) -> int:
    """Bump the view counter of a published post. Not audited."""
    post = get_published_by_id(post_id)

    with transactional():
        # atomic increment in SQL
        db.session.query(Post).filter(Post.id == post.id).update(
            {Post.views: Post.views + 1},
            synchronize_session=False,
        )

    db.session.refresh(post)
    return post.views
