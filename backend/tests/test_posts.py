"""
Tests for the blog post use cases and routes.
"""

import pytest
from pydantic import ValidationError
from werkzeug.exceptions import NotFound

from sitebuilder.extensions import db
from sitebuilder.models.audit_log import AuditLog
from sitebuilder.models.post import Post
from sitebuilder.domain.invariants.exceptions import InvariantViolation
from sitebuilder.application.blog.create_post import create_post
from sitebuilder.application.blog.delete_post import delete_post
from sitebuilder.application.blog.publish_post import publish_post
from sitebuilder.application.blog.queries import get_published_by_slug, list_featured, list_published
from sitebuilder.application.blog.record_view import record_view
from sitebuilder.application.blog.unpublish_post import unpublish_post
from sitebuilder.application.blog.update_post import update_post

ACTOR = "admin-1"
API = "/api/v1"
CONTENT = "<p>Um texto sobre sonhos e símbolos.</p>"


def post_data(slug, **extra):
    return {
        "title": f"Post {slug}",
        "slug": slug,
        "excerpt": "Resumo do artigo publicado.",
        "content": CONTENT,
        **extra,
    }


def published_post(slug, day=1, **extra):
    return create_post(
        actor_id=ACTOR,
        data=post_data(slug, status="published", publishedAt=f"2024-01-{day:02d}T10:00:00Z", **extra),
    )


def actions():
    return [log.action for log in AuditLog.query.order_by(AuditLog.created_at).all()]


@pytest.fixture
def draft(app):
    return create_post(actor_id=ACTOR, data=post_data("sonhos"))


class TestCreatePost:
    def test_draft_by_default(self, draft):
        assert draft.status == "draft"
        assert draft.published_at is None
        assert draft.views == 0
        assert actions() == ["post.create"]

    def test_slug_is_normalized(self, app):
        created = create_post(actor_id=ACTOR, data=post_data("  Sombra-E-Persona "))
        assert created.slug == "sombra-e-persona"

    def test_content_is_sanitized(self, app):
        created = create_post(
            actor_id=ACTOR,
            data=post_data("limpo", content="<p>Texto seguro</p><script>alert(1)</script>"),
        )
        assert "<script" not in created.content
        assert "Texto seguro" in created.content

    def test_tags_are_trimmed(self, app):
        created = create_post(actor_id=ACTOR, data=post_data("tags", tags=[" jung ", "", "  "]))
        assert created.tags == ["jung"]

    def test_short_excerpt_is_rejected(self, app):
        with pytest.raises(ValidationError):
            create_post(actor_id=ACTOR, data=post_data("curto", excerpt="curto"))
        assert Post.query.count() == 0

    def test_created_published(self, app):
        created = published_post("publicado")
        assert created.status == "published"
        assert created.published_at is not None


class TestFeaturedLimit:
    def test_fourth_featured_post_is_rejected(self, app):
        for day, slug in enumerate(["um", "dois", "tres"], start=1):
            published_post(slug, day=day, isFeatured=True)

        with pytest.raises(InvariantViolation, match="3 published posts"):
            published_post("quatro", day=4, isFeatured=True)
        assert Post.query.count() == 3

    def test_drafts_do_not_count(self, app):
        for slug in ["um", "dois", "tres"]:
            create_post(actor_id=ACTOR, data=post_data(slug, isFeatured=True))

        created = published_post("quatro", isFeatured=True)
        assert created.is_featured is True

    def test_publishing_a_featured_draft_respects_the_limit(self, app):
        for day, slug in enumerate(["um", "dois", "tres"], start=1):
            published_post(slug, day=day, isFeatured=True)
        pending = create_post(actor_id=ACTOR, data=post_data("quatro", isFeatured=True))

        with pytest.raises(InvariantViolation):
            publish_post(post_id=pending.id, actor_id=ACTOR)
        assert db.session.get(Post, pending.id).status == "draft"

    def test_republishing_a_featured_post_is_allowed(self, app):
        posts = [published_post(slug, day=day, isFeatured=True) for day, slug in enumerate(["um", "dois", "tres"], start=1)]
        republished = publish_post(post_id=posts[0].id, actor_id=ACTOR)
        assert republished.status == "published"


class TestUpdatePost:
    def test_content_change_sends_published_post_to_draft(self, app):
        live = published_post("vivo")

        updated, changed_to_draft = update_post(post_id=live.id, actor_id=ACTOR, data={"title": "Novo titulo"})

        assert changed_to_draft is True
        assert updated.status == "draft"
        assert updated.title == "Novo titulo"

    def test_featured_toggle_keeps_post_live(self, app):
        live = published_post("vivo")

        updated, changed_to_draft = update_post(post_id=live.id, actor_id=ACTOR, data={"isFeatured": True})

        assert changed_to_draft is False
        assert updated.status == "published"
        assert updated.is_featured is True

    def test_publish_through_update(self, draft):
        updated, _ = update_post(post_id=draft.id, actor_id=ACTOR, data={"status": "published"})
        assert updated.status == "published"
        assert updated.published_at is not None

    def test_unknown_post(self, app):
        with pytest.raises(NotFound):
            update_post(post_id="missing", actor_id=ACTOR, data={"title": "Nada aqui"})


class TestLifecycle:
    def test_publish_and_unpublish(self, draft):
        publish_post(post_id=draft.id, actor_id=ACTOR)
        assert draft.status == "published"

        unpublish_post(post_id=draft.id, actor_id=ACTOR)
        assert draft.status == "draft"
        assert draft.published_at is None
        assert actions() == ["post.create", "post.publish", "post.unpublish"]

    def test_unpublish_draft_is_rejected(self, draft):
        with pytest.raises(InvariantViolation):
            unpublish_post(post_id=draft.id, actor_id=ACTOR)

    def test_delete(self, draft):
        delete_post(post_id=draft.id, actor_id=ACTOR)
        assert Post.query.count() == 0
        assert actions()[-1] == "post.delete"


class TestPublicQueries:
    def test_published_newest_first_with_limit(self, app):
        for day, slug in enumerate(["um", "dois", "tres"], start=1):
            published_post(slug, day=day)
        create_post(actor_id=ACTOR, data=post_data("rascunho"))

        posts, meta = list_published({"limit": "2"})

        assert [p.slug for p in posts] == ["tres", "dois"]
        assert meta == {"limit": 2, "offset": 0, "total": 3}

    def test_search_and_exclusions(self, app):
        first = published_post("sombra", day=1)
        published_post("persona", day=2)

        posts, _ = list_published({"search": "SOMBRA"})
        assert [p.slug for p in posts] == ["sombra"]

        posts, _ = list_published({"excludeIds": first.id})
        assert [p.slug for p in posts] == ["persona"]

    def test_featured_only_lists_published(self, app):
        published_post("destaque", isFeatured=True)
        create_post(actor_id=ACTOR, data=post_data("rascunho", isFeatured=True))

        assert [p.slug for p in list_featured()] == ["destaque"]

    def test_lookup_by_slug_hides_drafts(self, draft):
        with pytest.raises(NotFound):
            get_published_by_slug("sonhos")

        publish_post(post_id=draft.id, actor_id=ACTOR)
        assert get_published_by_slug("sonhos").id == draft.id

    def test_views_are_counted(self, app):
        live = published_post("lido")
        record_view(live.id)
        assert record_view(live.id) == 2

    def test_draft_views_are_not_counted(self, draft):
        with pytest.raises(NotFound):
            record_view(draft.id)


class TestPostRoutes:
    def test_admin_required(self, client, editor_headers):
        assert client.get(f"{API}/admin/posts").status_code == 401
        assert client.get(f"{API}/admin/posts", headers=editor_headers).status_code == 403

    def test_create_publish_and_read(self, client, admin_headers):
        response = client.post(f"{API}/admin/posts", json=post_data("arquetipos"), headers=admin_headers)
        assert response.status_code == 201
        post = response.get_json()["data"]
        assert post["status"] == "draft"

        assert client.get(f"{API}/posts/arquetipos").status_code == 404

        response = client.post(f"{API}/admin/posts/{post['id']}/publish", headers=admin_headers)
        assert response.status_code == 200

        response = client.get(f"{API}/posts/arquetipos")
        assert response.status_code == 200
        body = response.get_json()["data"]
        assert body["content"] == CONTENT
        assert "status" not in body

    def test_invalid_slug(self, client, admin_headers):
        response = client.post(f"{API}/admin/posts", json=post_data("não vale"), headers=admin_headers)
        assert response.status_code == 400
        assert response.get_json()["error"]["type"] == "ValidationError"

    def test_duplicate_slug(self, client, admin_headers):
        client.post(f"{API}/admin/posts", json=post_data("repetido"), headers=admin_headers)
        response = client.post(f"{API}/admin/posts", json=post_data("repetido"), headers=admin_headers)
        assert response.status_code == 409

    def test_update_reports_draft_fallback(self, client, admin_headers):
        live = published_post("vivo")

        response = client.put(
            f"{API}/admin/posts/{live.id}", json={"excerpt": "Outro resumo do artigo."}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.get_json()["data"]["changed_to_draft"] is True

    def test_public_list_is_paginated(self, client):
        for day, slug in enumerate(["um", "dois", "tres"], start=1):
            published_post(slug, day=day)

        response = client.get(f"{API}/posts?limit=2")

        data = response.get_json()["data"]
        assert [item["slug"] for item in data["items"]] == ["tres", "dois"]
        assert data["pagination"]["has_more"] is True
        assert "content" not in data["items"][0]

    def test_limit_out_of_range(self, client):
        assert client.get(f"{API}/posts?limit=500").status_code == 400

    def test_featured(self, client):
        published_post("destaque", isFeatured=True)
        response = client.get(f"{API}/posts/featured")
        assert [item["slug"] for item in response.get_json()["data"]] == ["destaque"]

    def test_view_counter_is_not_cached(self, client):
        live = published_post("lido")
        response = client.post(f"{API}/posts/{live.id}/view")
        assert response.status_code == 200
        assert response.get_json()["data"]["views"] == 1
        assert response.headers["Cache-Control"] == "no-store"
