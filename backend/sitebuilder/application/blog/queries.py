from typing import Any, Dict, List, Tuple

from werkzeug.exceptions import NotFound

from sitebuilder.extensions import db
from sitebuilder.models.post import Post
from sitebuilder.domain.invariants.post import MAX_FEATURED_POSTS
from sitebuilder.utils.pagination import OffsetMeta, paginate_offset
from .schemas import PostFilters


def get_post(post_id: str) -> Post:
    post = db.session.get(Post, post_id)
    if post is None:
        raise NotFound("Post not found")
    return post


def list_posts() -> List[Post]:
    """Admin list: drafts included, most recently edited first."""
    return Post.query.order_by(Post.updated_at.desc(), Post.id.desc()).all()


def _published():
    return Post.query.filter(Post.status == "published")


def list_published(filters: Dict[str, Any] | None = None) -> Tuple[List[Post], OffsetMeta]:
    """
    Published posts, newest first.

    Feeds the blog index and the `recent-posts` block (which asks for
    `limit=postsLimit`).
    """
    params = PostFilters.model_validate(filters or {})
    query = _published()
    if params.search:
        query = query.filter(Post.title.ilike(f"%{params.search.strip()}%"))
    if params.exclude_ids:
        query = query.filter(Post.id.notin_(params.exclude_ids))
    query = query.order_by(Post.published_at.desc(), Post.id.desc())
    return paginate_offset(query, limit=params.limit, offset=params.offset)


def list_featured(limit: int = MAX_FEATURED_POSTS) -> List[Post]:
    limit = max(1, min(limit, MAX_FEATURED_POSTS))
    return (
        _published()
        .filter(Post.is_featured.is_(True))
        .order_by(Post.updated_at.desc(), Post.published_at.desc())
        .limit(limit)
        .all()
    )


def get_published_by_slug(slug: str) -> Post:
    post = _published().filter(Post.slug == slug).first()
    if post is None:
        raise NotFound("Post not found")
    return post


def count_featured_published(exclude_id: str | None = None) -> int:
    query = _published().filter(Post.is_featured.is_(True))
    if exclude_id:
        query = query.filter(Post.id != exclude_id)
    return query.count()


def get_published_by_id(post_id: str) -> Post:
    post = _published().filter(Post.id == post_id).first()
    if post is None:
        raise NotFound("Post not found")
    return post
