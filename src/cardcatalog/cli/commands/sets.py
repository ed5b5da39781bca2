"""Set index listing command."""

import click
from cardcatalog.utils.amount_parser import format_currency


@click.command("sets")
@click.pass_context
def list_sets(ctx):
    """List saved sets, most recently updated first."""
    bridge = ctx.obj["bridge"]

    entries = bridge.list_sets()
    if not entries:
        click.echo("No saved sets yet. Use 'cardcatalog import' to add one.")
        return

    click.echo(f"\nSaved sets ({len(entries)}):")
    click.echo("-" * 100)
    click.echo(
        f"{'Slug':<36} {'Owned':>11} {'% Owned':>8} {'Total Cost':>14} {'Total Value':>14} {'Gain/Loss':>14}"
    )
    click.echo("-" * 100)
    for entry in entries:
        owned = f"{entry.owned_count}/{entry.row_count}"
        click.echo(
            f"{entry.slug[:36]:<36} {owned:>11} {entry.owned_pct:>7.1f}% "
            f"{format_currency(entry.total_cost):>14} {format_currency(entry.total_value):>14} "
            f"{format_currency(entry.gain_loss):>14}"
        )
        click.echo(f"    {entry.title} (updated {entry.updated_at.astimezone():%Y-%m-%d %H:%M})")


def register_commands(cli):
    """Register sets command with main CLI."""
    cli.add_command(list_sets)
