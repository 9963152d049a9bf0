from .page import _iso


def normalize_post(post, admin=False):
    data = {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "content": post.content,
        "cover_image_url": post.cover_image_url,
        "cover_image_alt": post.cover_image_alt,
        "tags": list(post.tags or []),
        "is_featured": bool(post.is_featured),
        "views": post.views or 0,
        "published_at": _iso(post.published_at),
    }

    if admin:
        data.update({
            "status": post.status,
            "created_at": _iso(post.created_at),
            "updated_at": _iso(post.updated_at),
        })

    return data


def normalize_post_card(post):
    """Listing view used by the blog index and the recent-posts block."""
    return {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "cover_image_url": post.cover_image_url,
        "cover_image_alt": post.cover_image_alt,
        "tags": list(post.tags or []),
        "published_at": _iso(post.published_at),
    }
