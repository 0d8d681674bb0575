# ABOUTME: CLI package for bookcafe, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click

from bookcafe.cli.commands import add_cmd, info_cmd, ls_cmd, reindex_cmd, rm_cmd, search_cmd


@click.group()
@click.version_option(package_name="bookcafe")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """bookcafe - a school library catalog with ranked book search."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(add_cmd.add)
cli.add_command(info_cmd.info)
cli.add_command(ls_cmd.ls)
cli.add_command(reindex_cmd.reindex)
cli.add_command(rm_cmd.rm)
cli.add_command(search_cmd.search)
