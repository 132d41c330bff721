"""Data seeding CLI commands."""

import click
from flask.cli import with_appcontext

from ledger.errors import LedgerError
from ledger.services.counters import recount_counters
from ledger.services.seed import clear_seed_data, seed_database


@click.group('seed')
def seed_commands():
    """Data seeding commands."""
    pass


@seed_commands.command('run')
@click.option('--force', is_flag=True, help='Purge existing content and non-admin users first')
@with_appcontext
def seed_run(force):
    """Seed demo articles, podcasts, resources, forum threads and contributors.

    Example:
        flask seed run
        flask seed run --force
    """
    try:
        result = seed_database(force=force)
    except LedgerError as e:
        click.echo(click.style(f'Error: {e.message}', fg='red'))
        raise SystemExit(1)

    if result.already_seeded:
        click.echo(click.style('Database already seeded; use --force to reseed.', fg='yellow'))
        return

    click.echo(click.style(result.message, fg='green'))
    for name, count in sorted(result.counts.items()):
        click.echo(f'  {name}: {count}')


@seed_commands.command('clear')
@click.option('--yes', is_flag=True, help='Confirm deletion without prompting')
@with_appcontext
def seed_clear(yes):
    """Delete all content and every non-admin user."""
    if not yes:
        click.confirm('This deletes all content and non-admin users. Continue?', abort=True)

    try:
        removed = clear_seed_data()
    except LedgerError as e:
        click.echo(click.style(f'Error: {e.message}', fg='red'))
        raise SystemExit(1)

    click.echo(click.style('Seed data cleared.', fg='green'))
    for name, count in sorted(removed.items()):
        click.echo(f'  {name}: {count}')


@seed_commands.command('recount')
@with_appcontext
def seed_recount():
    """Recompute like, reply, discussion, rating and poll vote counters from their rows."""
    try:
        touched = recount_counters()
    except LedgerError as e:
        click.echo(click.style(f'Error: {e.message}', fg='red'))
        raise SystemExit(1)

    click.echo(click.style('Counters recomputed.', fg='green'))
    for name, count in sorted(touched.items()):
        click.echo(f'  {name}: {count} rows')
