"""`flask layout ...` maintenance commands and `flask auth token`."""
import click
from flask.cli import with_appcontext
from flask_jwt_extended import create_access_token

from sitebuilder.application.cms.home import ensure_home
from sitebuilder.application.cms.maintenance import migrate_heroes, normalize_all_layouts
from sitebuilder.utils.audit import SYSTEM_ACTOR
from sitebuilder.utils.decorators import ADMIN_ROLE, role_claims


@click.group("layout")
def layout_cli():
    """Repair and migrate stored page layouts."""


@layout_cli.command("normalize-all")
@click.option("--dry-run", is_flag=True, help="Report without writing.")
@with_appcontext
def normalize_all_command(dry_run):
    report = normalize_all_layouts(dry_run=dry_run)
    for slug in report["normalized"]:
        click.echo(f"ok       {slug}")
    for slug in report["invalid"]:
        click.echo(f"invalid  {slug}", err=True)
    click.echo(
        f"{len(report['normalized'])} normalized, {len(report['invalid'])} invalid"
        + (" (dry run)" if dry_run else "")
    )
    if report["invalid"]:
        raise SystemExit(1)


@layout_cli.command("ensure-home")
@with_appcontext
def ensure_home_command():
    page = ensure_home(actor_id=SYSTEM_ACTOR)
    click.echo(f"home page {page.id} ({page.status})")


@layout_cli.command("migrate-heroes")
@click.option("--dry-run", is_flag=True, help="Report without writing.")
@with_appcontext
def migrate_heroes_command(dry_run):
    touched = migrate_heroes(dry_run=dry_run)
    for slug in touched:
        click.echo(slug)
    click.echo(f"{len(touched)} page(s) with legacy heroes" + (" (dry run)" if dry_run else ""))


@click.group("auth")
def auth_cli():
    """Token helpers for operators (there is no user store)."""


@auth_cli.command("token")
@click.option("--identity", required=True, help="Actor id recorded in the audit trail.")
@click.option("--role", default=ADMIN_ROLE, show_default=True)
@with_appcontext
def token_command(identity, role):
    click.echo(create_access_token(identity=identity, additional_claims=role_claims(role)))
