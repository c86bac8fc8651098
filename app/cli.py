import os
import click
from flask import current_app
from flask.cli import with_appcontext
from flask_migrate import upgrade as alembic_upgrade, stamp as alembic_stamp, migrate as alembic_migrate


def _assert_safe_for_upgrade():
    # Prevent accidental prod upgrades unless explicitly allowed
    env = (current_app.config.get("ENV") or "").lower()
    app_env = (os.getenv("APP_ENV") or "").lower()
    if app_env == "production" or env == "production":
        if (os.getenv("ALLOW_DB_MIGRATIONS") or "").lower() not in ("1", "true", "yes"):
            raise click.ClickException("Refusing to run DB migration in production without ALLOW_DB_MIGRATIONS=true")


@click.command("db-migrate-safe")
@click.option("-m", "--message", default="auto migration", help="Migration message")
@with_appcontext
def db_migrate_safe(message):
    """Generate a new migration script from current models."""
    alembic_migrate(message=message)
    click.echo("Migration script generated.")


@click.command("db-upgrade-safe")
@with_appcontext
def db_upgrade_safe():
    """Apply migrations to the configured database."""
    _assert_safe_for_upgrade()
    alembic_upgrade()
    click.echo("Database upgraded.")


@click.command("db-stamp-safe")
@click.option("--revision", default="head", help="Revision to stamp, default 'head'")
@with_appcontext
def db_stamp_safe(revision):
    """Mark the database at a given revision without running migrations."""
    _assert_safe_for_upgrade()
    alembic_stamp(revision)
    click.echo(f"Database stamped at {revision}.")


@click.command("catalog-seed")
@click.option("--force", is_flag=True, help="Overwrite existing catalog rows")
@with_appcontext
def catalog_seed(force):
    """Load the bundled categories and products into the database."""
    from models import db
    from app.services.catalog import seed_catalog

    count = seed_catalog(force=force)
    db.session.commit()
    if count:
        click.echo(f"Seeded {count} products.")
    else:
        click.echo("Catalog already present, nothing to do (use --force to reload).")


@click.command("expiry-sweep")
@click.option("--days", type=int, default=None, help="Alert window in days")
@with_appcontext
def expiry_sweep(days):
    """Add expiring-stock notifications for every shopper."""
    from app.tasks.notifications import sweep_expiring_items_task

    window = days if days is not None else current_app.config["EXPIRY_ALERT_DAYS"]
    added = sweep_expiring_items_task(window)
    click.echo(f"Added {added} notifications.")


def register_cli(app):
    app.cli.add_command(db_migrate_safe)
    app.cli.add_command(db_upgrade_safe)
    app.cli.add_command(db_stamp_safe)
    app.cli.add_command(catalog_seed)
    app.cli.add_command(expiry_sweep)

