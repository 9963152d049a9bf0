"""
Tests for the `flask layout` commands.
"""

from sitebuilder.extensions import db
from sitebuilder.models.audit_log import AuditLog
from sitebuilder.models.page import Page


def test_ensure_home(app):
    result = app.test_cli_runner().invoke(args=["layout", "ensure-home"])

    assert result.exit_code == 0
    assert "published" in result.output
    assert AuditLog.query.one().actor_id == "system"


def test_normalize_all_dry_run(app):
    db.session.add(Page(slug="legado", title="Legado", status="draft", layout={"version": 1, "cols": []}))
    db.session.commit()

    result = app.test_cli_runner().invoke(args=["layout", "normalize-all", "--dry-run"])

    assert result.exit_code == 0
    assert "1 normalized, 0 invalid (dry run)" in result.output
    assert Page.query.one().layout["version"] == 1


def test_normalize_all_reports_invalid(app):
    db.session.add(Page(slug="quebrado", title="Quebrado", status="draft", layout={"version": 5}))
    db.session.commit()

    result = app.test_cli_runner().invoke(args=["layout", "normalize-all"])

    assert result.exit_code == 1


def test_migrate_heroes_without_legacy(app):
    result = app.test_cli_runner().invoke(args=["layout", "migrate-heroes"])
    assert result.exit_code == 0
    assert "0 page(s) with legacy heroes" in result.output


def test_auth_token(app, client):
    result = app.test_cli_runner().invoke(args=["auth", "token", "--identity", "ops-1"])

    assert result.exit_code == 0
    token = result.output.strip()
    response = client.get("/api/v1/admin/pages", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
