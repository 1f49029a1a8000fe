"""dhsession CLI -- inspect the DH group and run the local session demo.

Thin wrapper around the library using click.
"""

from __future__ import annotations

import asyncio
import logging

import click

from dhsession.demo.handshake import run_demo
from dhsession.protocol import DHSessionError
from dhsession.protocol.dh import generate_keypair
from dhsession.protocol.params import G, P
from dhsession.registry.config import Settings


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _error(msg: str) -> None:
    """Print an error message to stderr and exit 1."""
    click.echo(msg, err=True)
    raise SystemExit(1)


def _configure_logging(settings: Settings, debug: bool) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if debug or settings.debug:
        logging.getLogger("dhsession").setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="dhsession")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """dhsession -- Diffie-Hellman session keys with expiring storage."""
    settings = Settings()
    _configure_logging(settings, debug)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


# ---------------------------------------------------------------------------
# dhsession params
# ---------------------------------------------------------------------------


@cli.command()
def params() -> None:
    """Print the fixed DH group parameters."""
    click.echo(f"p ({P.bit_length()} bits): {P:X}")
    click.echo(f"g: {G}")


# ---------------------------------------------------------------------------
# dhsession keygen
# ---------------------------------------------------------------------------


@cli.command()
def keygen() -> None:
    """Generate an ephemeral keypair and print its public value."""
    pair = generate_keypair()
    click.echo(f"{pair.public:X}")


# ---------------------------------------------------------------------------
# dhsession demo
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("message", default="attack at dawn")
@click.option("--client-id", default="user1", help="Session id for the demo client.")
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Session timeout in seconds (default: DHSESSION_SESSION_TIMEOUT).",
)
@click.pass_context
def demo(ctx: click.Context, message: str, client_id: str, timeout: float | None) -> None:
    """Handshake with a local server and exchange one encrypted message."""
    settings: Settings = ctx.obj["settings"]
    if timeout is None:
        timeout = settings.session_timeout
    try:
        result = asyncio.run(run_demo(message, client_id=client_id, timeout=timeout))
    except (DHSessionError, ValueError) as exc:
        _error(f"Error: {exc}")

    click.echo(f"Client key: {result.client_key.hex()}")
    click.echo(f"Keys match: {'yes' if result.client_key == result.server_key else 'no'}")
    click.echo(f"Reply: {result.reply}")
