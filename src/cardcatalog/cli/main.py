"""Main CLI entry point."""

import logging

import click
from cardcatalog.database.factories import create_sqlite_store
from cardcatalog.database.repository import KeyValueCatalogRepository
from cardcatalog.domain.persistence import PersistenceBridge

# Import and register all commands at module level
from cardcatalog.cli.commands import (
    import_cmd,
    export_cmd,
    sets,
    view,
    edit,
    reference,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CARDCATALOG_DB_PATH environment variable)",
    envvar="CARDCATALOG_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Card Catalog - trading-card checklist editor.

    Import a checklist spreadsheet, track which cards you own with grading
    and pricing details, and follow completion and value per set.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Open the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        ctx.obj["store"] = store
        ctx.obj["bridge"] = PersistenceBridge(KeyValueCatalogRepository(store))
        ctx.call_on_close(store.disconnect)


# Register all commands
import_cmd.register_commands(cli)
export_cmd.register_commands(cli)
sets.register_commands(cli)
view.register_commands(cli)
edit.register_commands(cli)
reference.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
