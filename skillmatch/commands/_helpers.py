"""CLI helpers for opening the application context."""

from __future__ import annotations

import asyncio

import click
from pymongo.errors import PyMongoError

from skillmatch.context import AppContext
from skillmatch.errors import NotFoundError, TaskPolicyError


def run(coro):
    """Run an async function from sync context."""
    return asyncio.run(coro)


async def get_context() -> AppContext:
    """Create and initialize an AppContext. Exits if MongoDB is unreachable."""
    ctx = AppContext()
    try:
        await ctx.initialize()
    except PyMongoError as e:
        raise SystemExit(
            f"Cannot connect to MongoDB at {ctx.config.mongodb.uri}: {e}"
        ) from e
    return ctx


def fail(error: Exception) -> None:
    """Report a rejected request on stderr and exit non-zero."""
    if isinstance(error, TaskPolicyError):
        click.echo(f"Rejected: {error}", err=True)
    elif isinstance(error, NotFoundError):
        click.echo(f"Not found: {error}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    raise SystemExit(1)
