"""CSV import command."""

import click
from cardcatalog.cli.error_handling import handle_domain_error
from cardcatalog.domain.editor import SetEditor
from cardcatalog.domain.errors import DomainError, set_not_found
from cardcatalog.domain.statistics import compute_owned_stats

SUGGESTED_BRANDS = ("Topps", "Bowman", "Play Ball")


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--set", "slug", help="Replace the rows of an existing set (by slug)")
@click.option("--year", type=int, help="Set year, e.g. 1987 (new sets)")
@click.option(
    "--brand", help=f"Set brand, e.g. {', '.join(SUGGESTED_BRANDS)} (new sets)"
)
@click.option("--description", help="Short set description, max 60 characters (new sets)")
@click.pass_context
def import_csv(ctx, csv_file: str, slug: str | None, year: int | None, brand: str | None, description: str | None):
    """Import a card checklist from a CSV file.

    The file must contain all 14 checklist columns. Either name a new set
    with --year, --brand and --description, or replace the rows of an
    existing set with --set.

    Examples:
        cardcatalog import checklist.csv --year 1987 --brand Topps --description "Base set"
        cardcatalog import checklist.csv --set 1987-topps-base-set
    """
    bridge = ctx.obj["bridge"]

    if slug is None and (year is None or not brand or not description):
        click.echo(
            "Error: Provide --year, --brand and --description for a new set, or --set SLUG.",
            err=True,
        )
        ctx.exit(1)

    if slug is not None:
        editor = SetEditor.open(bridge, slug)
        if not editor.is_named:
            click.echo(f"Error: {set_not_found(slug)}", err=True)
            ctx.exit(1)
    else:
        editor = SetEditor(bridge)

    try:
        count = editor.import_csv(csv_file)
        if slug is None:
            editor.name_set(year, brand, description)
        else:
            editor.flush()
    except DomainError as e:
        editor.autosave.cancel()
        handle_domain_error(ctx, e)
        return

    stats = compute_owned_stats(editor.store.rows)
    click.echo("\nImport complete:")
    click.echo(f"  Set: {editor.title} ({editor.slug})")
    click.echo(f"  Rows: {count}")
    click.echo(f"  Owned: {stats.owned_count} ({stats.owned_pct:.1f}%)")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
