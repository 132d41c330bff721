"""User management CLI commands."""

import click
from flask.cli import with_appcontext

from ledger.errors import LedgerError
from ledger.extensions import db
from ledger.models import UserRole
from ledger.services.users import user_service


@click.group('user')
def user_commands():
    """User management commands."""
    pass


@user_commands.command('create')
@click.option('--email', required=True, help='User email')
@click.option('--password', required=True, help='User password')
@click.option('--role', type=click.Choice([r.value for r in UserRole]), default=UserRole.ADMIN.value, show_default=True)
@click.option('--first-name', default=None, help='First name')
@click.option('--last-name', default=None, help='Last name')
@with_appcontext
def create_user(email, password, role, first_name, last_name):
    """Create a local account."""
    try:
        user = user_service.create({
            'email': email,
            'password': password,
            'role': role,
            'first_name': first_name,
            'last_name': last_name,
        })
    except LedgerError as e:
        click.echo(click.style(f'Error: {e.message}', fg='red'))
        return

    click.echo(click.style('User created successfully!', fg='green'))
    click.echo(f'  Email: {user.email}')
    click.echo(f'  Role: {role}')


@user_commands.command('set-role')
@click.option('--email', required=True, help='User email')
@click.option('--role', type=click.Choice([r.value for r in UserRole]), required=True)
@with_appcontext
def set_role(email, role):
    """Change a user's role."""
    user = user_service.find_by_email(email)
    if not user:
        click.echo(click.style(f'Error: No user {email} found', fg='red'))
        return

    user.role = UserRole(role)
    db.session.commit()
    click.echo(click.style(f'{user.email} is now {role}.', fg='green'))


@user_commands.command('set-password')
@click.option('--email', required=True, help='User email')
@click.option('--password', required=True, help='New password')
@with_appcontext
def set_password(email, password):
    """Set or reset a user's password."""
    user = user_service.find_by_email(email)
    if not user:
        click.echo(click.style(f'Error: No user {email} found', fg='red'))
        return

    user.set_password(password)
    db.session.commit()
    click.echo(click.style('Password updated.', fg='green'))
