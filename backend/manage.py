"""Management commands for the gym back office backend."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import click
from sqlalchemy.engine import make_url

from gym_backoffice.core.config import get_database_url
from gym_backoffice.db.session import SessionLocal, create_tables, drop_tables
from gym_backoffice.domain.entities import Admin
from gym_backoffice.main import load_environment
from gym_backoffice.repositories.admin_repo import AdminRepository
from gym_backoffice.services.auth_service import AuthService

load_environment()
logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def display_database_url() -> str:
    """DATABASE_URL with any password masked, for log lines."""
    return make_url(get_database_url()).render_as_string(hide_password=True)


@click.group()
def cli() -> None:
    """Entry point for management commands."""


@cli.command("init-db")
def init_db() -> None:
    """Create every table and index that does not exist yet."""
    create_tables()
    logging.info("Database schema ready at %s", display_database_url())


@cli.command("reset-db")
@click.confirmation_option(prompt="This drops every table and all data. Continue?")
def reset_db() -> None:
    """Drop and recreate the whole schema."""
    drop_tables()
    create_tables()
    logging.info("Database schema recreated at %s", display_database_url())


@cli.command("create-admin")
@click.argument("admin_id")
@click.argument("password")
@click.argument("fname")
@click.argument("lname", required=False)
@click.argument("phone", required=False)
@click.option(
    "--dob",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date of birth, YYYY-MM-DD.",
)
@click.option("--male/--female", "is_male", default=True)
@click.option("--email", default=None)
def create_admin(
    admin_id: str,
    password: str,
    fname: str,
    lname: Optional[str],
    phone: Optional[str],
    dob,
    is_male: bool,
    email: Optional[str],
) -> None:
    """Create an admin account that can log in to the API."""
    create_tables()
    session = SessionLocal()
    try:
        admin = Admin(
            admin_id=admin_id,
            fname=fname,
            lname=lname,
            phone_number=phone,
            email=email,
            dob=date(dob.year, dob.month, dob.day) if dob else None,
            is_male=is_male,
        )
        try:
            created = AuthService(AdminRepository(session)).create_admin(admin, password)
        except ValueError as e:
            raise click.ClickException(str(e))
        logging.info("Created admin %s (id=%s)", created.admin_id, created.id)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    cli()
