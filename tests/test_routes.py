"""HTTP flows for the user directory and account pages."""

from __future__ import annotations

from urllib.parse import urlparse

from sqlmodel import select

from bankbook.models import Account, Address, Transaction
from bankbook.services import accounts as account_service
from bankbook.services import ledger as ledger_service
from bankbook.services import users as user_service


def _path(response) -> str:
    return urlparse(response.headers["Location"]).path


def _register(app_session_factory, username="alice", password="pw"):
    return user_service.register_user(
        username=username, password=password, name=username.title(), session_factory=app_session_factory
    )


def test_index_redirects_to_user_list(client):
    response = client.get("/")

    assert response.status_code == 302
    assert _path(response) == "/users"


def test_empty_user_list(client):
    response = client.get("/users")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "No users registered yet." in body
    assert "Only user" not in body


def test_user_list_exposes_single_user(client, app_session_factory):
    _register(app_session_factory, "alice")

    body = client.get("/users").get_data(as_text=True)
    assert "Only user: alice" in body

    _register(app_session_factory, "bob")
    body = client.get("/users").get_data(as_text=True)
    assert "Only user" not in body
    assert "alice" in body and "bob" in body


def test_register_form_renders(client):
    response = client.get("/register")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "<h1>Register</h1>" in body
    assert 'name="zip_code"' in body


def test_register_redirects_to_user_page(client, app_session_factory):
    response = client.post(
        "/register",
        data={"username": "alice", "password": "pw", "name": "Alice", "city": "Porto"},
    )

    assert response.status_code == 302
    users = user_service.list_users(session_factory=app_session_factory)
    assert [user.username for user in users] == ["alice"]
    assert _path(response) == f"/users/{users[0].user_id}"
    assert users[0].address.city == "Porto"

    page = client.get(_path(response))
    body = page.get_data(as_text=True)
    assert "User registered successfully." in body
    assert f"User #{users[0].user_id}" in body
    assert 'value="Porto"' in body
    assert "No accounts yet." in body


def test_register_invalid_form_rerenders(client, app_session_factory):
    response = client.post("/register", data={"username": "", "password": ""})

    assert response.status_code == 400
    body = response.get_data(as_text=True)
    assert "Username is required." in body
    assert "Password is required." in body
    assert user_service.list_users(session_factory=app_session_factory) == []


def test_register_duplicate_username(client, app_session_factory):
    _register(app_session_factory, "alice")

    response = client.post(
        "/register", data={"username": "alice", "password": "other"}, follow_redirects=True
    )

    assert response.status_code == 200
    assert response.request.path == "/users"
    assert "Username already exists." in response.get_data(as_text=True)
    assert len(user_service.list_users(session_factory=app_session_factory)) == 1


def test_show_missing_user_is_404(client):
    assert client.get("/users/999").status_code == 404


def test_show_user_does_not_persist_blank_address(client, app_session_factory):
    user = _register(app_session_factory)

    response = client.get(f"/users/{user.user_id}")

    assert response.status_code == 200
    with app_session_factory() as session:
        assert session.get(Address, user.user_id) is None


def test_update_user(client, app_session_factory):
    user = _register(app_session_factory, "alice", password="original")

    response = client.post(
        f"/users/{user.user_id}",
        data={"username": "alice2", "name": "Alice Two", "password": "", "city": "Braga"},
    )

    assert response.status_code == 302
    assert _path(response) == f"/users/{user.user_id}"
    stored = user_service.get_user(user.user_id, session_factory=app_session_factory)
    assert stored.username == "alice2"
    assert stored.name == "Alice Two"
    assert stored.address.city == "Braga"
    assert user_service.verify_password(stored, "original")

    body = client.get(_path(response)).get_data(as_text=True)
    assert "User updated successfully." in body


def test_update_user_invalid_form_flashes(client, app_session_factory):
    user = _register(app_session_factory)

    response = client.post(
        f"/users/{user.user_id}", data={"username": ""}, follow_redirects=True
    )

    assert "Username is required." in response.get_data(as_text=True)
    assert user_service.get_user(user.user_id, session_factory=app_session_factory).username == "alice"


def test_update_missing_user_redirects_to_list(client):
    response = client.post("/users/999", data={"username": "ghost"})

    assert response.status_code == 302
    assert _path(response) == "/users"


def test_delete_user(client, app_session_factory):
    user = _register(app_session_factory)

    response = client.post(f"/users/{user.user_id}/delete", follow_redirects=True)

    assert response.request.path == "/users"
    assert "User deleted." in response.get_data(as_text=True)
    assert user_service.find_user(user.user_id, session_factory=app_session_factory) is None


def test_delete_missing_user(client):
    response = client.post("/users/999/delete", follow_redirects=True)

    assert "User could not be found." in response.get_data(as_text=True)


def test_create_account_redirects_to_account_page(client, app_session_factory):
    user = _register(app_session_factory)

    first = client.post(f"/users/{user.user_id}/accounts")
    second = client.post(f"/users/{user.user_id}/accounts", follow_redirects=True)

    assert first.status_code == 302
    with app_session_factory() as session:
        stored = session.exec(select(Account).order_by(Account.account_id)).all()
        names = [account.account_name for account in stored]
        ids = [account.account_id for account in stored]
    assert names == ["Account #1", "Account #2"]
    assert _path(first) == f"/users/{user.user_id}/accounts/{ids[0]}"
    body = second.get_data(as_text=True)
    assert "Account #2 created." in body
    assert "Balance: $ 0.00" in body


def test_create_account_for_missing_user(client, app_session_factory):
    response = client.post("/users/999/accounts")

    assert response.status_code == 302
    assert _path(response) == "/users/999"
    with app_session_factory() as session:
        assert session.exec(select(Account)).all() == []


def test_show_missing_account_is_404(client, app_session_factory):
    user = _register(app_session_factory)

    assert client.get(f"/users/{user.user_id}/accounts/999").status_code == 404


def test_record_transactions_updates_balance(client, app_session_factory):
    user = _register(app_session_factory)
    account = account_service.create_account_for_user(user.user_id, session_factory=app_session_factory)
    base = f"/users/{user.user_id}/accounts/{account.account_id}"

    deposit = client.post(f"{base}/transactions", data={"amount": "100.00", "type": "D"})
    assert deposit.status_code == 302
    assert _path(deposit) == base

    response = client.post(
        f"{base}/transactions", data={"amount": "30", "type": "W"}, follow_redirects=True
    )
    body = response.get_data(as_text=True)
    assert "Withdrawal recorded." in body
    assert "Balance: $ 70.00" in body
    assert "Deposit" in body

    assert ledger_service.account_balance(
        account.account_id, session_factory=app_session_factory
    ) == 70

    profile = client.get(f"/users/{user.user_id}").get_data(as_text=True)
    assert "$ 70.00" in profile


def test_invalid_transaction_is_not_recorded(client, app_session_factory):
    user = _register(app_session_factory)
    account = account_service.create_account_for_user(user.user_id, session_factory=app_session_factory)
    base = f"/users/{user.user_id}/accounts/{account.account_id}"

    bad_amount = client.post(
        f"{base}/transactions", data={"amount": "ten", "type": "D"}, follow_redirects=True
    )
    bad_type = client.post(
        f"{base}/transactions", data={"amount": "10", "type": "Z"}, follow_redirects=True
    )
    huge_exponent = client.post(
        f"{base}/transactions", data={"amount": "1e30", "type": "D"}
    )
    huge_digits = client.post(
        f"{base}/transactions",
        data={"amount": "99999999999999999999", "type": "D"},
        follow_redirects=True,
    )

    assert "Enter a valid number for the amount." in bad_amount.get_data(as_text=True)
    assert huge_exponent.status_code == 302
    assert _path(huge_exponent) == base
    assert "Amount is too large." in huge_digits.get_data(as_text=True)
    assert "Choose deposit or withdrawal." in bad_type.get_data(as_text=True)
    with app_session_factory() as session:
        assert session.exec(select(Transaction)).all() == []


def test_transaction_for_missing_account(client, app_session_factory):
    user = _register(app_session_factory)

    response = client.post(
        f"/users/{user.user_id}/accounts/999/transactions", data={"amount": "5", "type": "D"}
    )

    assert response.status_code == 302
    assert _path(response) == f"/users/{user.user_id}"


def test_rename_account(client, app_session_factory):
    user = _register(app_session_factory)
    account = account_service.create_account_for_user(user.user_id, session_factory=app_session_factory)

    response = client.post(
        f"/users/{user.user_id}/accounts/{account.account_id}",
        data={"account_name": "Holiday Fund"},
        follow_redirects=True,
    )

    assert response.request.path == f"/users/{user.user_id}"
    body = response.get_data(as_text=True)
    assert "Account updated successfully." in body
    assert "Holiday Fund" in body


def test_rename_account_requires_name(client, app_session_factory):
    user = _register(app_session_factory)
    account = account_service.create_account_for_user(user.user_id, session_factory=app_session_factory)

    response = client.post(
        f"/users/{user.user_id}/accounts/{account.account_id}",
        data={"account_name": "  "},
        follow_redirects=True,
    )

    assert "Account name is required." in response.get_data(as_text=True)
    stored = account_service.get_account(account.account_id, session_factory=app_session_factory)
    assert stored.account_name == "Account #1"


def test_delete_account(client, app_session_factory):
    user = _register(app_session_factory)
    account = account_service.create_account_for_user(user.user_id, session_factory=app_session_factory)
    ledger_service.create_transaction(
        account.account_id, "12.00", "D", session_factory=app_session_factory
    )

    response = client.post(
        f"/users/{user.user_id}/accounts/{account.account_id}/delete", follow_redirects=True
    )

    assert response.request.path == f"/users/{user.user_id}"
    assert "Account deleted." in response.get_data(as_text=True)
    with app_session_factory() as session:
        assert session.exec(select(Account)).all() == []
        assert session.exec(select(Transaction)).all() == []
