"""Cell editing command."""

import click
from cardcatalog.cli.error_handling import handle_domain_error, resolve_field_or_exit
from cardcatalog.domain.editor import SetEditor
from cardcatalog.domain.entities import CardField, CURRENCY_FIELDS, READ_ONLY_FIELDS
from cardcatalog.domain.errors import DomainError, set_not_found


@click.command("edit")
@click.argument("slug")
@click.argument("row", type=int)
@click.argument("field_name", metavar="FIELD")
@click.argument("value")
@click.pass_context
def edit_cell(ctx, slug: str, row: int, field_name: str, value: str):
    """Edit one cell of a set and save.

    ROW is the row number shown by 'cardcatalog view'. FIELD is a column
    header or its snake_case name. Card # and Description cannot be edited.

    Examples:
        cardcatalog edit 1987-topps-base-set 12 Owned Yes
        cardcatalog edit 1987-topps-base-set 12 cost 4.5
        cardcatalog edit 1987-topps-base-set 12 "Date Purchased" 03152024
    """
    bridge = ctx.obj["bridge"]

    editor = SetEditor.open(bridge, slug)
    if not editor.is_named:
        click.echo(f"Error: {set_not_found(slug)}", err=True)
        ctx.exit(1)

    field = resolve_field_or_exit(ctx, field_name)
    if field in READ_ONLY_FIELDS:
        click.echo(f"Error: {field.header} cannot be edited after import", err=True)
        ctx.exit(1)

    index = row - 1
    warning = None
    try:
        editor.update_cell(index, field, value)
        if field in CURRENCY_FIELDS:
            editor.finalize_currency_edit(index, field)
        elif field is CardField.DATE_PURCHASED:
            warning = editor.finalize_date_edit(index)
    except DomainError as e:
        editor.autosave.cancel()
        handle_domain_error(ctx, e)
        return
    editor.flush()

    if warning is not None:
        click.echo(f"Warning: {warning}", err=True)
    click.echo(f"Row {row} {field.header}: {editor.store[index].text(field)!r}")


def register_commands(cli):
    """Register edit command with main CLI."""
    cli.add_command(edit_cell)
