# ABOUTME: Shared Click options for bookcafe CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --db.

from pathlib import Path

import click

from bookcafe.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="BOOKCAFE_DB",
    help=f"Path to library database (default: {DEFAULT_DB_PATH}, or $BOOKCAFE_DB)",
)
