"""Set viewing command."""

import click
from cardcatalog.cli.error_handling import resolve_field_or_exit
from cardcatalog.domain.editor import SetEditor
from cardcatalog.domain.errors import set_not_found
from cardcatalog.domain.sort_filter import SortDirection, SortSpec
from cardcatalog.domain.statistics import compute_financials, compute_owned_stats
from cardcatalog.utils.amount_parser import format_currency


@click.command("view")
@click.argument("slug")
@click.option("--needed-only", is_flag=True, help="Show only cards not marked as owned")
@click.option("--sort", "sort_field", help="Column to sort by (e.g. 'Grade', 'cost', 'Card #')")
@click.option(
    "--asc/--desc",
    "ascending",
    default=None,
    help="Sort direction (defaults to descending for Grade, Cost, Value, Target Price)",
)
@click.pass_context
def view_set(ctx, slug: str, needed_only: bool, sort_field: str | None, ascending: bool | None):
    """View a set's cards with optional filtering and sorting.

    The Row column is the card's position in the set; use it with
    'cardcatalog edit'.
    """
    bridge = ctx.obj["bridge"]

    editor = SetEditor.open(bridge, slug)
    if not editor.is_named:
        click.echo(f"Error: {set_not_found(slug)}", err=True)
        ctx.exit(1)

    editor.needed_only = needed_only
    if sort_field is not None:
        field = resolve_field_or_exit(ctx, sort_field)
        editor.click_sort(field)
        if ascending is not None:
            direction = SortDirection.ASC if ascending else SortDirection.DESC
            editor.sort = SortSpec(field, direction)

    rows = editor.view()
    owned = compute_owned_stats(editor.store.rows)
    money = compute_financials(editor.store.rows)

    click.echo(f"\n{editor.title}")
    click.echo(
        f"Owned {owned.owned_count}/{owned.total} ({owned.owned_pct:.1f}%) | "
        f"Cost {format_currency(money.total_cost)} | Value {format_currency(money.total_value)} | "
        f"Gain/Loss {format_currency(money.gain_loss)}"
    )

    if not rows:
        click.echo("No cards to show.")
        return

    click.echo("-" * 150)
    click.echo(
        f"{'Row':<5} {'Card #':<7} {'Description':<28} {'Owned':<6} {'Raw':<9} {'Graded':<7} "
        f"{'Co.':<4} {'Grade':<6} {'Cost':>11} {'Value':>11} {'Target':>11} {'Sale':>11} "
        f"{'Purchased':<11} {'From':<15}"
    )
    click.echo("-" * 150)
    for item in rows:
        r = item.row
        click.echo(
            f"{item.original_index + 1:<5} {r.card_number[:7]:<7} {r.description[:28]:<28} "
            f"{r.owned:<6} {r.raw_grade:<9} {r.graded:<7} {r.grading_company:<4} {r.grade:<6} "
            f"{r.cost[:11]:>11} {r.value[:11]:>11} {r.target_price[:11]:>11} {r.sale_price[:11]:>11} "
            f"{r.date_purchased[:11]:<11} {r.purchased_from[:15]:<15}"
        )


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_set)
