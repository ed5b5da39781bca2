"""Reference dataset command."""

import json

import click
from cardcatalog.domain.errors import NotFoundError
from cardcatalog.domain.reference import ReferenceDataService


@click.command("reference")
@click.option("--set", "set_name", help="Dataset name; omit to list the catalog")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    default="data/reference",
    show_default=True,
    envvar="CARDCATALOG_REFERENCE_DIR",
    help="Directory holding sets.json and <name>.json files",
)
@click.pass_context
def show_reference(ctx, set_name: str | None, data_dir: str):
    """Print a read-only reference dataset, or the catalog listing, as JSON.

    Exits with 1 when the named dataset does not exist and with 2 when the
    data cannot be read.
    """
    service = ReferenceDataService(data_dir)
    try:
        data = service.get(set_name)
    except NotFoundError as e:
        click.echo(json.dumps({"error": str(e)}), err=True)
        ctx.exit(1)
    except (OSError, ValueError) as e:
        click.echo(json.dumps({"error": str(e) or "Server error"}), err=True)
        ctx.exit(2)

    click.echo(json.dumps(data, indent=2))


def register_commands(cli):
    """Register reference command with main CLI."""
    cli.add_command(show_reference)
