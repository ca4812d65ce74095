"""Taskboard CLI — database setup and account provisioning.

Usage:
    taskboard serve                                 # Run the API server
    taskboard init-db                               # Create tables from the ORM models
    taskboard create-user jane@x.com --name "Jane Doe"   # Prompts for the password
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import sys

import click

from taskboard.errors import TaskboardError, ValidationError


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


@click.group()
def cli():
    """Taskboard administration commands."""


@cli.command()
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(reload: bool):
    """Run the API server on the configured host and port."""
    import uvicorn

    from taskboard.config import settings

    uvicorn.run("taskboard.main:app", host=settings.host, port=settings.port, reload=reload)


@cli.command("init-db")
def init_db():
    """Create all tables (use Alembic migrations in production)."""
    from taskboard.db.engine import create_all, engine

    async def _go():
        await create_all()
        await engine.dispose()

    _run(_go())
    click.secho("Tables created.", fg="green")


@cli.command("create-user")
@click.argument("email")
@click.option("--name", "full_name", required=True, help="Full name of the user")
@click.password_option(help="Password (prompted if omitted)")
def create_user(email: str, full_name: str, password: str):
    """Register an account with the same rules as the signup endpoint."""
    from taskboard.auth.jwt import session_codec
    from taskboard.auth.password import PasswordHasher
    from taskboard.db.engine import async_session_factory, engine
    from taskboard.services.auth_service import AuthService
    from taskboard.services.user_service import UserService

    async def _go():
        try:
            async with async_session_factory() as db:
                svc = AuthService(UserService(db), hasher=PasswordHasher(), codec=session_codec)
                return await svc.register(full_name, email, password, password)
        finally:
            await engine.dispose()

    try:
        result = _run(_go())
    except ValidationError as e:
        for detail in e.details:
            click.secho(f"{detail['field']}: {detail['message']}", fg="red", err=True)
        sys.exit(1)
    except TaskboardError as e:
        click.secho(f"Error: {e.message}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"Created user {result.principal_id} <{result.user.email}>", fg="green")


if __name__ == "__main__":
    cli()
