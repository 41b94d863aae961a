import pytest

from orderdesk.hashing import verify_password
from orderdesk.models import User
from orderdesk.scripts import create_user


@pytest.fixture
def answers(monkeypatch):
    def feed(lines, passwords):
        lines, passwords = iter(lines), iter(passwords)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
        monkeypatch.setattr(create_user.getpass, "getpass", lambda prompt="": next(passwords))

    return feed


def test_creates_user_with_hashed_password(session, answers):
    answers(["Dora", "Dora@Example.com", ""], ["pw", "pw"])

    assert create_user.main(session) == 0

    user = session.query(User).filter_by(email="dora@example.com").one()
    assert user.role.value == "USER"
    assert verify_password("pw", user.password_hash)


def test_mismatched_passwords_create_nothing(session, answers):
    answers(["Dora", "dora@example.com", "admin"], ["pw", "other"])

    assert create_user.main(session) == 1
    assert session.query(User).count() == 0


def test_duplicate_email_is_refused(session, user, answers):
    answers(["Again", user.email, "USER"], ["pw", "pw"])

    assert create_user.main(session) == 2
