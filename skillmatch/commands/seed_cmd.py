"""CLI handler for loading reference data."""

from __future__ import annotations

import click

from skillmatch.commands._helpers import get_context, run
from skillmatch.services.seed_service import seed_reference_data


@click.command("seed")
def seed_command():
    """Load reference skills, developers and sample tasks."""

    async def _seed():
        ctx = await get_context()
        try:
            counts = await seed_reference_data(
                ctx.skill_service, ctx.developer_service, ctx.task_service,
            )
            click.echo(
                f"Seeded {counts['skills']} skill(s), {counts['developers']} developer(s), "
                f"{counts['tasks']} task(s)."
            )
        finally:
            await ctx.close()

    run(_seed())
