from sitebuilder.domain.layout.normalize import strip_hidden_blocks


def _iso(value):
    return value.isoformat() if value else None


def normalize_page(page, admin=False):
    layout = page.layout or {"version": 2, "sections": []}

    data = {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "page_key": page.page_key,
        "description": page.description,
        "layout": layout if admin else strip_hidden_blocks(layout),
        "published_at": _iso(page.published_at),
    }

    if admin:
        data.update({
            "status": page.status,
            "is_home": page.is_home,
            "created_at": _iso(page.created_at),
            "updated_at": _iso(page.updated_at),
        })

    return data


def normalize_page_summary(page):
    """List view: everything but the layout document."""
    return {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "page_key": page.page_key,
        "status": page.status,
        "published_at": _iso(page.published_at),
        "updated_at": _iso(page.updated_at),
    }
