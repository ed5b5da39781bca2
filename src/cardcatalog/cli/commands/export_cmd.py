"""CSV export command."""

import click
from cardcatalog.cli.error_handling import handle_domain_error
from cardcatalog.domain.editor import SetEditor
from cardcatalog.domain.errors import DomainError, set_not_found


@click.command("export")
@click.argument("slug")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Output file (defaults to the set title with .csv)",
)
@click.pass_context
def export_csv(ctx, slug: str, output: str | None):
    """Export a set's rows to a CSV file with the standard columns."""
    bridge = ctx.obj["bridge"]

    editor = SetEditor.open(bridge, slug)
    if not editor.is_named:
        click.echo(f"Error: {set_not_found(slug)}", err=True)
        ctx.exit(1)

    try:
        path = editor.export_csv(output)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Exported {len(editor.store)} row(s) to {path}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_csv)
