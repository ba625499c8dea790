"""CLI handlers for developer commands."""

from __future__ import annotations

import click

from skillmatch.commands._helpers import fail, get_context, run
from skillmatch.errors import NotFoundError


@click.group("developer")
def developer_group():
    """Manage developers."""
    pass


@developer_group.command("create")
@click.argument("name")
@click.option("--skill", "-s", "skills", multiple=True, help="Skill the developer has (repeatable)")
def developer_create(name: str, skills: tuple[str, ...]):
    """Create a developer."""

    async def _create():
        ctx = await get_context()
        try:
            dev = await ctx.developer_service.create_developer(name, skills=skills)
            click.echo(f"Created developer: #{dev.id} {dev.name} [{', '.join(dev.skills)}]")
        except (ValueError, NotFoundError) as e:
            fail(e)
        finally:
            await ctx.close()

    run(_create())


@developer_group.command("list")
def developer_list():
    """List developers and their assigned tasks."""

    async def _list():
        ctx = await get_context()
        try:
            rows = await ctx.developer_service.list_developers_with_tasks()
            if not rows:
                click.echo("No developers found.")
                return
            for dev, tasks in rows:
                click.echo(f"  #{dev.id} {dev.name} [{', '.join(dev.skills)}] - {len(tasks)} task(s)")
        finally:
            await ctx.close()

    run(_list())


@developer_group.command("show")
@click.argument("developer_id", type=int)
def developer_show(developer_id: int):
    """Show a developer and their tasks."""

    async def _show():
        ctx = await get_context()
        try:
            dev = await ctx.developer_service.get_developer(developer_id)
            if not dev:
                click.echo(f"Developer not found: {developer_id}", err=True)
                raise SystemExit(1)
            tasks = await ctx.developer_service.get_developer_tasks(developer_id)
            click.echo(f"Developer: {dev.name}")
            click.echo(f"  ID: {dev.id}")
            click.echo(f"  Skills: {', '.join(dev.skills) or '-'}")
            click.echo(f"  Tasks: {len(tasks)}")
            for t in tasks:
                click.echo(f"    #{t.id} ({t.status.value}) {t.title}")
        finally:
            await ctx.close()

    run(_show())


@developer_group.command("add-skill")
@click.argument("developer_id", type=int)
@click.argument("skill")
def developer_add_skill(developer_id: int, skill: str):
    """Give a developer an existing skill."""

    async def _add():
        ctx = await get_context()
        try:
            dev = await ctx.developer_service.add_skill(developer_id, skill)
            click.echo(f"#{dev.id} {dev.name} [{', '.join(dev.skills)}]")
        except NotFoundError as e:
            fail(e)
        finally:
            await ctx.close()

    run(_add())
