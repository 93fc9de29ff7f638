"""User directory routes."""

from __future__ import annotations

from flask import current_app, flash, redirect, render_template, request, url_for
from werkzeug.exceptions import NotFound

from ...errors import UserNotFound, ValidationError
from ...extensions import session_scope
from ...models import Address, User
from ...services import users as user_service
from . import bp
from .forms import UserForm


@bp.get("/")
def index():
    return redirect(url_for("users.list_users"))


@bp.get("/register")
def register_form():
    """Render an empty registration form."""

    return _render_user_form(UserForm(), user=None, address=Address())


@bp.post("/register")
def register():
    """Register a user and send the browser to its page."""

    form = UserForm.from_mapping(request.form)
    if not form.validate(require_password=True):
        return _render_user_form(form, user=None, address=Address(**form.address)), 400

    try:
        user = user_service.register_user(
            username=form.username,
            password=form.password,
            name=form.name,
            address_fields=form.address,
            session_factory=session_scope,
        )
    except ValidationError as exc:
        current_app.logger.warning("Failed to register user %s: %s", form.username, exc)
        flash(exc.message, "danger")
        return redirect(url_for("users.list_users"))

    flash("User registered successfully.", "success")
    return redirect(url_for("users.show_user", user_id=user.user_id))


@bp.get("/users")
def list_users():
    """List every user; a lone user is also exposed as ``user``."""

    users = user_service.list_users(session_factory=session_scope)
    single = users[0] if len(users) == 1 else None
    return render_template("users/list.html", users=users, user=single)


@bp.get("/users/<int:user_id>")
def show_user(user_id: int):
    """Render the profile form with accounts, balances and an address to fill in."""

    try:
        profile = user_service.load_user_profile(user_id, session_factory=session_scope)
    except UserNotFound as exc:
        raise NotFound(str(exc)) from exc

    form = UserForm.from_user(profile.user, profile.address)
    return _render_user_form(
        form,
        user=profile.user,
        address=profile.address,
        accounts=profile.accounts,
    )


@bp.post("/users/<int:user_id>")
def update_user(user_id: int):
    """Save profile and address changes."""

    form = UserForm.from_mapping(request.form)
    if not form.validate(require_password=False):
        for messages in form.errors.values():
            for message in messages:
                flash(message, "danger")
        return redirect(url_for("users.show_user", user_id=user_id))

    try:
        user_service.update_user(
            user_id,
            username=form.username,
            name=form.name,
            password=form.password or None,
            address_fields=form.address,
            session_factory=session_scope,
        )
    except UserNotFound:
        flash("User could not be found.", "warning")
        return redirect(url_for("users.list_users"))
    except ValidationError as exc:
        flash(exc.message, "danger")
        return redirect(url_for("users.show_user", user_id=user_id))

    flash("User updated successfully.", "success")
    return redirect(url_for("users.show_user", user_id=user_id))


@bp.post("/users/<int:user_id>/delete")
def delete_user(user_id: int):
    try:
        user_service.delete_user(user_id, session_factory=session_scope)
    except UserNotFound:
        current_app.logger.warning("Delete requested for missing user %s", user_id)
        flash("User could not be found.", "warning")
    else:
        flash("User deleted.", "success")
    return redirect(url_for("users.list_users"))


def _render_user_form(
    form: UserForm,
    *,
    user: User | None,
    address: Address,
    accounts=(),
):
    if user is None:
        form_action = url_for("users.register")
    else:
        form_action = url_for("users.update_user", user_id=user.user_id)
    return render_template(
        "users/register.html",
        form=form,
        user=user,
        users=[user] if user is not None else [],
        address=address,
        accounts=accounts,
        form_action=form_action,
    )
