"""Management commands for the hospital backend application."""

from __future__ import annotations

import logging

import click

from hospital.db.seed import seed_especialidades
from hospital.db.session import create_tables, drop_tables
from hospital.main import create_app

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

# Create the Flask application once so commands share its configuration.
app = create_app()


@click.group()
def cli() -> None:
    """Entry point for management commands."""


@cli.command("create-tables")
@click.option(
    "--drop",
    is_flag=True,
    default=False,
    help="Drop every table before creating the schema (destroys all data).",
)
def create_tables_command(drop: bool) -> None:
    """Create the database schema."""
    with app.app_context():
        if drop:
            click.confirm("This will delete ALL data. Continue?", abort=True)
            drop_tables()
            logging.info("All tables dropped.")
        create_tables()
        logging.info("Database tables created.")


@cli.command("seed-especialidades")
def seed_especialidades_command() -> None:
    """Insert the default medical specialties (idempotent)."""
    with app.app_context():
        create_tables()
        created = seed_especialidades()
        logging.info("%s especialidade(s) created.", created)


if __name__ == "__main__":
    cli()
