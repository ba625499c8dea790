"""CLI handlers for task commands."""

from __future__ import annotations

import json

import click

from skillmatch.commands._helpers import fail, get_context, run
from skillmatch.context import AppContext
from skillmatch.errors import NotFoundError, TaskPolicyError
from skillmatch.models.task import Task, TaskNode, TaskStatus

STATUS_CHOICES = [s.value for s in TaskStatus]


def _format_task(task: Task) -> str:
    skills = ", ".join(task.skills) if task.skills else "-"
    dev = f" dev={task.developer_id}" if task.developer_id is not None else ""
    return f"#{task.id} ({task.status.value}) [{skills}]{dev} - {task.title}"


def _echo_tree(node: TaskNode, indent: int = 0) -> None:
    prefix = "  " * indent
    click.echo(f"{prefix}{_format_task(node.task)}")
    if node.developer is not None:
        click.echo(f"{prefix}    developer: {node.developer.name} ({', '.join(node.developer.skills)})")
    for child in node.subtasks:
        _echo_tree(child, indent + 1)


@click.group("task")
def task_group():
    """Manage tasks."""
    pass


@task_group.command("create")
@click.argument("title")
@click.option("--skill", "-s", "skills", multiple=True, help="Required skill (inferred from the title if omitted)")
@click.option("--parent", "parent_id", type=int, default=None, help="Parent task ID")
def task_create(title: str, skills: tuple[str, ...], parent_id: int | None):
    """Create a new task."""

    async def _create():
        ctx = await get_context()
        try:
            task = await ctx.task_service.create_task(
                title=title, skills=skills, parent_task_id=parent_id,
            )
            click.echo(f"Created task: {_format_task(task)}")
        except (ValueError, NotFoundError) as e:
            fail(e)
        finally:
            await ctx.close()

    run(_create())


@task_group.command("list")
@click.option("--status", type=click.Choice(STATUS_CHOICES), default=None, help="Filter by status")
@click.option("--developer", "developer_id", type=int, default=None, help="Filter by developer ID")
@click.option("--skill", "-s", "skills", multiple=True, help="Require this skill (repeatable, all must match)")
@click.option("--search", default="", help="Case-insensitive title search")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=20, show_default=True)
def task_list(status: str | None, developer_id: int | None, skills: tuple[str, ...], search: str, page: int, limit: int):
    """List top-level tasks."""

    async def _list():
        ctx = await get_context()
        try:
            tasks, total = await ctx.task_service.list_tasks(
                status=status, developer_id=developer_id, skills=skills,
                search=search, page=page, limit=limit,
            )
            if not tasks:
                click.echo("No tasks found.")
                return
            for t in tasks:
                click.echo(f"  {_format_task(t)}")
            click.echo(f"Page {page}: {len(tasks)} of {total} task(s)")
        finally:
            await ctx.close()

    run(_list())


@task_group.command("show")
@click.argument("task_id", type=int)
@click.option("--json", "as_json", is_flag=True, help="Print the task tree as JSON")
def task_show(task_id: int, as_json: bool):
    """Show a task with its subtasks."""

    async def _show():
        ctx = await get_context()
        try:
            tree = await ctx.task_service.get_task_tree(task_id)
            if as_json:
                click.echo(json.dumps(tree.to_dict(), indent=2, default=str))
            else:
                _echo_tree(tree)
        except NotFoundError as e:
            fail(e)
        finally:
            await ctx.close()

    run(_show())


@task_group.command("status")
@click.argument("task_id", type=int)
@click.argument("status", type=click.Choice(STATUS_CHOICES))
def task_status(task_id: int, status: str):
    """Change a task's status."""

    async def _status():
        ctx = await get_context()
        try:
            task = await ctx.task_service.update_status(task_id, status)
            click.echo(f"Updated: {_format_task(task)}")
        except (TaskPolicyError, NotFoundError) as e:
            fail(e)
        finally:
            await ctx.close()

    run(_status())


@task_group.command("assign")
@click.argument("task_id", type=int)
@click.argument("developer_id", type=int)
def task_assign(task_id: int, developer_id: int):
    """Assign a developer to a task."""

    async def _assign():
        ctx = await get_context()
        try:
            task = await ctx.task_service.assign_developer(task_id, developer_id)
            click.echo(f"Assigned: {_format_task(task)}")
        except (TaskPolicyError, NotFoundError) as e:
            fail(e)
        finally:
            await ctx.close()

    run(_assign())


@task_group.command("unassign")
@click.argument("task_id", type=int)
def task_unassign(task_id: int):
    """Remove a task's developer."""

    async def _unassign():
        ctx = await get_context()
        try:
            task = await ctx.task_service.unassign_developer(task_id)
            click.echo(f"Unassigned: {_format_task(task)}")
        except NotFoundError as e:
            fail(e)
        finally:
            await ctx.close()

    run(_unassign())


@task_group.command("infer")
@click.argument("title")
def task_infer(title: str):
    """Show the skills that would be inferred for TITLE (nothing is saved)."""

    async def _infer():
        ctx = AppContext()
        try:
            result = await ctx.inference_service.infer(title)
            click.echo(f"Skills: {', '.join(result.skills)} (method: {result.method})")
        finally:
            await ctx.close()

    run(_infer())
