"""CLI error handling helpers."""

import click

from cardcatalog.domain.entities import CardField
from cardcatalog.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def resolve_field_or_exit(ctx: click.Context, name: str) -> CardField:
    """Resolve a column header or attribute name, or exit with a CLI error."""
    try:
        return CardField.parse(name)
    except ValueError as exc:
        headers = ", ".join(f.header for f in CardField)
        click.echo(f"Error: {exc}. Known fields: {headers}", err=True)
        ctx.exit(1)
