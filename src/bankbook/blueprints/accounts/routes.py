"""Account and ledger routes nested under a user."""

from __future__ import annotations

from flask import current_app, flash, redirect, render_template, request, url_for
from werkzeug.exceptions import NotFound

from ...errors import AccountNotFound, UserNotFound, ValidationError
from ...extensions import session_scope
from ...models import TRANSACTION_TYPES
from ...money import format_currency
from ...services import accounts as account_service
from ...services import ledger as ledger_service
from . import bp
from .forms import AccountForm, TransactionForm


@bp.get("/<int:account_id>")
def show_account(user_id: int, account_id: int):
    """Render an account with its newest-first ledger and balance."""

    try:
        ledger = ledger_service.load_account_ledger(account_id, session_factory=session_scope)
    except AccountNotFound as exc:
        raise NotFound(str(exc)) from exc

    return render_template(
        "accounts/account.html",
        account=ledger.account,
        owners=ledger.owners,
        transactions=ledger.transactions,
        balance=ledger.balance,
        formatted_balance=format_currency(ledger.balance),
        transaction_types=TRANSACTION_TYPES,
        user_id=user_id,
    )


@bp.post("")
def create_account(user_id: int):
    """Open a new account for the user."""

    try:
        account = account_service.create_account_for_user(user_id, session_factory=session_scope)
    except UserNotFound:
        current_app.logger.warning("Failed to create account for user %s", user_id)
        flash("User could not be found.", "warning")
        return redirect(url_for("users.show_user", user_id=user_id))

    flash(f"{account.account_name} created.", "success")
    return redirect(
        url_for("accounts.show_account", user_id=user_id, account_id=account.account_id)
    )


@bp.post("/<int:account_id>")
def update_account(user_id: int, account_id: int):
    """Rename an account."""

    form = AccountForm.from_mapping(request.form)
    if not form.validate():
        flash(form.errors["account_name"][0], "danger")
        return redirect(url_for("users.show_user", user_id=user_id))

    try:
        account_service.rename_account(
            account_id, form.account_name, session_factory=session_scope
        )
    except AccountNotFound:
        flash("Account could not be found.", "warning")
    except ValidationError as exc:
        flash(exc.message, "danger")
    else:
        flash("Account updated successfully.", "success")
    return redirect(url_for("users.show_user", user_id=user_id))


@bp.post("/<int:account_id>/transactions")
def create_transaction(user_id: int, account_id: int):
    """Record a deposit or withdrawal against the account."""

    account_url = url_for("accounts.show_account", user_id=user_id, account_id=account_id)
    form = TransactionForm.from_mapping(request.form)
    if not form.validate():
        flash(form.first_error() or "Unable to record transaction.", "danger")
        return redirect(account_url)

    try:
        ledger_service.create_transaction(
            account_id, form.amount, form.type, session_factory=session_scope
        )
    except AccountNotFound:
        flash("Account could not be found.", "warning")
        return redirect(url_for("users.show_user", user_id=user_id))
    except ValidationError as exc:
        flash(exc.message, "danger")
        return redirect(account_url)

    flash(f"{TRANSACTION_TYPES[form.type]} recorded.", "success")
    return redirect(account_url)


@bp.post("/<int:account_id>/delete")
def delete_account(user_id: int, account_id: int):
    try:
        account_service.delete_account(account_id, session_factory=session_scope)
    except AccountNotFound:
        flash("Account could not be found.", "warning")
    else:
        flash("Account deleted.", "success")
    return redirect(url_for("users.show_user", user_id=user_id))
