"""Click CLI definitions - main entry point."""

from __future__ import annotations

import logging
import sys

import click

from skillmatch.commands.config_cmd import config_group
from skillmatch.commands.developer_cmd import developer_group
from skillmatch.commands.seed_cmd import seed_command
from skillmatch.commands.skill_cmd import skill_group
from skillmatch.commands.task_cmd import task_group


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, debug: bool) -> None:
    """skillmatch - skill-based task assignment."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


cli.add_command(task_group, "task")
cli.add_command(developer_group, "developer")
cli.add_command(skill_group, "skill")
cli.add_command(seed_command, "seed")
cli.add_command(config_group, "config")


if __name__ == "__main__":
    cli()
