"""CLI handlers for skill commands."""

from __future__ import annotations

import click

from skillmatch.commands._helpers import fail, get_context, run


@click.group("skill")
def skill_group():
    """Manage the skill catalogue."""
    pass


@skill_group.command("list")
def skill_list():
    """List skills."""

    async def _list():
        ctx = await get_context()
        try:
            skills = await ctx.skill_service.list_skills()
            if not skills:
                click.echo("No skills found. Run 'skillmatch seed' to add the defaults.")
                return
            for s in skills:
                click.echo(f"  #{s.id} {s.name}")
        finally:
            await ctx.close()

    run(_list())


@skill_group.command("create")
@click.argument("name")
def skill_create(name: str):
    """Add a skill to the catalogue."""

    async def _create():
        ctx = await get_context()
        try:
            skill = await ctx.skill_service.create_skill(name)
            click.echo(f"Created skill: #{skill.id} {skill.name}")
        except ValueError as e:
            fail(e)
        finally:
            await ctx.close()

    run(_create())
