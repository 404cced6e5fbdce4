"""Token CLI for opencloud.

Authenticates against the identity service and prints the issued token
together with the endpoint resolved for the requested service.
"""

from __future__ import annotations

import json
import logging

import click
import httpx
from rich.console import Console
from rich.table import Table

from opencloud.common.error import BaseError
from opencloud.infrastructure.observability import configure_logging, get_logger, log_exception

from . import context

console = Console()
logger = get_logger(__name__)


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file with builder options (authUrl, user, scope, ...).",
)
@click.option("--auth-url", default=None, help="Identity endpoint; overrides OS_AUTH_URL.")
@click.option(
    "--service-type",
    "catalog_type",
    default="identity",
    show_default=True,
    help="Catalog type of the service whose endpoint should be resolved.",
)
@click.option("--service-name", "catalog_name", default=None, help="Catalog name of the service.")
@click.option("--region", default=None, help="Region of the endpoint; overrides OS_REGION_NAME.")
@click.option(
    "--interface",
    "url_type",
    default=None,
    help="Endpoint interface (public, internal, admin); overrides OS_INTERFACE.",
)
@click.option("--json", "as_json", is_flag=True, help="Print machine-readable JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP activity to stderr.")
@click.pass_context
def token(
    ctx: click.Context,
    config_path: str | None,
    auth_url: str | None,
    catalog_type: str,
    catalog_name: str | None,
    region: str | None,
    url_type: str | None,
    as_json: bool,
    verbose: bool,
) -> None:
    """Issue a token and show the endpoint of a catalog service."""

    if verbose:
        configure_logging(level=logging.DEBUG)

    options = context.resolve_options(
        config_path,
        {
            "authUrl": auth_url,
            "catalogType": catalog_type,
            "catalogName": catalog_name,
            "region": region,
            "urlType": url_type,
        },
    )

    try:
        with context.build_cloud(options) as cloud:
            resolved = cloud.builder.merge_options({})
            issued, endpoint = resolved["identityService"].authenticate(resolved)
    except (BaseError, httpx.HTTPError) as exc:
        if verbose:
            log_exception(logger, "Authentication failed", exc, auth_url=options.get("authUrl"))
        console.print(str(exc), style="red", markup=False, highlight=False, soft_wrap=True)
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps({
            "token": issued.id,
            "expires_at": issued.expires_at.isoformat(),
            "endpoint": endpoint,
        }))
        return

    table = Table(title="Token")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Token", issued.id)
    table.add_row("Expires", issued.expires_at.isoformat())
    table.add_row("Endpoint", endpoint)
    console.print(table)
