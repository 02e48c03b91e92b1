"""CLI commands for wikirev."""

import base64
import logging
import re
import secrets
import sys
from pathlib import Path

import click


@click.group()
@click.version_option(package_name="wikirev")
def cli():
    """wikirev - person/character wiki with revision history."""
    pass


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=8080, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.option("--workers", default=1, type=int, help="Number of worker processes")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Logging level (defaults to logging.level from settings)",
)
def serve(host, port, reload, workers, log_level):
    """Run the API server."""
    import asyncio
    import signal

    from hypercorn.asyncio import serve as hypercorn_serve
    from hypercorn.config import Config

    from wikirev.config import get_settings

    settings = get_settings()
    level = (log_level or settings.logging.level).upper()
    logging.basicConfig(level=level, format=settings.logging.format)

    config = Config()
    config.application_path = "wikirev.asgi:app"
    config.bind = [f"{host}:{port}"]
    config.workers = 1 if reload else workers
    config.loglevel = level
    config.include_server_header = False

    if reload:
        config.use_reloader = True
        from hypercorn.run import run
        run(config)
        return

    from wikirev.asgi import app

    shutdown_event = asyncio.Event()

    loop = asyncio.new_event_loop()
    loop.add_signal_handler(signal.SIGINT, shutdown_event.set)
    loop.add_signal_handler(signal.SIGTERM, shutdown_event.set)
    try:
        loop.run_until_complete(
            hypercorn_serve(app, config, shutdown_trigger=shutdown_event.wait)
        )
    finally:
        loop.close()


def _write_env_var(env_path: Path, name: str, value: str) -> None:
    """Set ``name=value`` in a .env file, replacing an existing assignment."""
    env_content = env_path.read_text() if env_path.exists() else ""

    pattern = re.compile(rf"^{name}=.*$", re.MULTILINE)
    new_line = f"{name}={value}"

    if pattern.search(env_content):
        env_content = pattern.sub(new_line, env_content)
    else:
        if env_content and not env_content.endswith("\n"):
            env_content += "\n"
        env_content += new_line + "\n"

    env_path.write_text(env_content)


@cli.command()
@click.option(
    "--write",
    type=click.Path(),
    default=None,
    help="Write SECRET_KEY to a .env file",
)
@click.option(
    "--format",
    "fmt",
    default="urlsafe",
    type=click.Choice(["urlsafe", "hex", "base64"]),
    help="Output format for the secret key",
)
@click.option("--length", default=32, type=int, help="Number of random bytes")
def secret(write, fmt, length):
    """Generate a secure secret key."""
    if fmt == "urlsafe":
        key = secrets.token_urlsafe(length)
    elif fmt == "hex":
        key = secrets.token_hex(length)
    else:
        key = base64.b64encode(secrets.token_bytes(length)).decode("ascii")

    if write:
        _write_env_var(Path(write), "SECRET_KEY", key)
        click.echo(f"SECRET_KEY written to {write}")
    else:
        click.echo(key)


@cli.command()
@click.option("--uid", required=True, type=click.IntRange(min=1), help="User id the token authenticates")
@click.option(
    "--permission",
    "permissions",
    multiple=True,
    help="Permission flag to grant, e.g. mono_edit (repeatable)",
)
@click.option("--expires-in", default=None, type=int, help="Lifetime in seconds (defaults to auth.token_max_age)")
def token(uid, permissions, expires_in):
    """Issue a bearer token for a user."""
    from wikirev.auth.tokens import create_user_token
    from wikirev.config import get_settings

    settings = get_settings()
    lifetime = expires_in if expires_in is not None else settings.auth.token_max_age
    click.echo(create_user_token(uid, list(permissions), settings.secret_key, lifetime))


def _run_alembic(project_root: Path, args: list[str]) -> None:
    """Build an Alembic Config programmatically and run the given command."""
    from alembic.config import CommandLine, Config

    alembic_ini = project_root / "alembic.ini"
    if not alembic_ini.exists():
        alembic_ini = Path(__file__).parent / "alembic.ini"
        if not alembic_ini.exists():
            click.echo("Error: Could not find alembic.ini", err=True)
            sys.exit(1)

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(Path(__file__).parent / "alembic"))

    cmd = CommandLine()
    options = cmd.parser.parse_args(args)
    if not hasattr(options, "cmd"):
        cmd.parser.error("too few arguments")
    else:
        cfg.cmd_opts = options
        fn, positional, kwarg = options.cmd
        fn(
            cfg,
            *[getattr(options, k, None) for k in positional],
            **{k: getattr(options, k, None) for k in kwarg},
        )


@cli.command(
    context_settings=dict(
        ignore_unknown_options=True,
        allow_extra_args=True,
    )
)
@click.pass_context
def db(ctx):
    """Run database migrations via Alembic.

    \b
    Examples:
        wikirev db upgrade head     # Apply all migrations
        wikirev db downgrade -1     # Rollback one migration
        wikirev db current          # Show current revision
        wikirev db history          # Show migration history
    """
    project_root = Path.cwd()

    if not ctx.args:
        click.echo(ctx.get_help())
        return

    _run_alembic(project_root, ctx.args)


if __name__ == "__main__":
    cli()
