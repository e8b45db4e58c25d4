from __future__ import annotations

import argparse
import getpass
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from pengiriman.crud.users import DuplicateError, create_user
from pengiriman.db.session import SessionLocal, init_models


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Create a login account for the pengiriman API."
    )
    parser.add_argument("--email", required=True, help="Login email (stored lowercased).")
    parser.add_argument(
        "--password",
        default=None,
        help="Password. Prompted for when omitted.",
    )
    parser.add_argument(
        "--inactive",
        action="store_true",
        help="Create the account disabled.",
    )
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Password must not be empty.")
        return 1

    init_models()
    with SessionLocal() as db:
        try:
            user = create_user(db, args.email, password, is_active=not args.inactive)
        except DuplicateError:
            print(f"User '{args.email.strip().lower()}' already exists.")
            return 1

    print(f"Created user id={user.id} email={user.email} active={user.is_active}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
