#!/usr/bin/env python3
from __future__ import annotations

from getpass import getpass

from cms.auth.users import CredentialStore
from cms.config import Settings
from cms.errors import CmsError
from cms.services.account_service import register_user


def main() -> None:
    store = CredentialStore(Settings.from_env().users_path)

    username = input("Username [admin]: ").strip() or "admin"
    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    try:
        register_user(store, username=username, password=pw1, confirmation=pw2)
    except CmsError as e:
        raise SystemExit(e.message)

    print(f"OK -> {store.path}")


if __name__ == "__main__":
    main()
