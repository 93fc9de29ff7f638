"""Flask CLI commands for Bankbook."""

from __future__ import annotations

import click
from flask import current_app


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("bankbook-init-db")
    def bankbook_init_db() -> None:
        """Create any missing tables."""

        from .extensions import get_engine
        from .infra.database import init_database

        init_database(get_engine())
        click.echo(f"Database ready: {current_app.config['BANKBOOK_CONFIG'].DATABASE_URL}")

    @app.cli.command("bankbook-seed")
    @click.option("--username", default="demo", show_default=True, help="Demo username")
    @click.option("--password", default="demo-password", show_default=True, help="Demo password")
    def bankbook_seed(username: str, password: str) -> None:
        """Create a demo user with two accounts and a few transactions."""

        from .errors import ValidationError
        from .extensions import session_scope
        from .services import accounts, ledger, users

        try:
            user = users.register_user(
                username=username,
                password=password,
                name="Demo User",
                session_factory=session_scope,
            )
        except ValidationError as exc:
            raise click.ClickException(exc.message) from exc

        checking = accounts.create_account_for_user(user.user_id, session_factory=session_scope)
        savings = accounts.create_account_for_user(user.user_id, session_factory=session_scope)
        for account_id, amount, code in (
            (checking.account_id, "1500.00", "D"),
            (checking.account_id, "42.17", "W"),
            (checking.account_id, "250.00", "W"),
            (savings.account_id, "5000.00", "D"),
        ):
            ledger.create_transaction(account_id, amount, code, session_factory=session_scope)

        click.echo(
            f"Seeded user {user.username} (#{user.user_id}) with accounts "
            f"#{checking.account_id} and #{savings.account_id}."
        )

    @app.cli.command("bankbook-balance")
    @click.argument("account_id", type=int)
    def bankbook_balance(account_id: int) -> None:
        """Print the balance of ACCOUNT_ID."""

        from .errors import AccountNotFound
        from .extensions import session_scope
        from .money import format_currency
        from .services import ledger

        try:
            balance = ledger.account_balance(account_id, session_factory=session_scope)
        except AccountNotFound as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(format_currency(balance))
