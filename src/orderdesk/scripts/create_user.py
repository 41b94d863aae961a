#!/usr/bin/env python3
"""Create a user from the terminal: ``python -m orderdesk.scripts.create_user``."""

import getpass
import sys

from orderdesk import crud
from orderdesk.db import SessionLocal
from orderdesk.exceptions import CreateFailedError
from orderdesk.hashing import hash_password
from orderdesk.models import User
from orderdesk.schemas import UserCreate


def ask_password() -> str:
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Confirm password: "):
        raise ValueError("passwords do not match")
    return password


def main(db=None) -> int:
    fields = {
        "name": input("Name: ").strip(),
        "email": input("Email: ").strip().lower(),
        "role": input("Role [USER/ADMIN] (Enter for USER): ").strip().upper() or "USER",
    }
    try:
        fields["password"] = ask_password()
        # pydantic's ValidationError is a ValueError too
        data = UserCreate(**fields)
    except ValueError as e:
        print(f"Input error: {e}")
        return 1

    user = User(
        name=data.name,
        role=data.role,
        email=data.email,
        password_hash=hash_password(data.password),
    )
    session = db or SessionLocal()
    try:
        crud.create(session, user, "user")
    except CreateFailedError:
        print(f"Error: could not create {data.email}; is it already registered?")
        return 2
    finally:
        if db is None:
            session.close()
    print(f"Created user id={user.id} email={user.email} role={user.role.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
