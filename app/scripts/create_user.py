"""
Register a user from the command line. Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD
Prints the new user's id and access token.
"""
import argparse
import asyncio
import sys

from app.core.config import get_settings
from app.core.context import AppContext
from app.core.errors import ValidationError
from app.services.users import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Plant Care user.")
    parser.add_argument("name", help="Unique name (at least 3 chars)")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help="Password")
    args = parser.parse_args(argv)

    name = args.name.strip()
    email = args.email.strip()
    if len(name) < 3:
        print("Name must be at least 3 characters.", file=sys.stderr)
        return 1
    if not email or not args.password:
        print("Email and password are required.", file=sys.stderr)
        return 1

    ctx = AppContext(get_settings())
    ctx.startup()
    try:
        with ctx.session() as db:
            try:
                user = create_user(db, name, email, args.password)
            except ValidationError as e:
                for field, message in e.errors.items():
                    print(f"{field}: {message}", file=sys.stderr)
                return 1
            print(f"Created user '{user.name}' with id {user.id}.")
            print(f"Access token: {user.access_token}")
            return 0
    finally:
        asyncio.run(ctx.shutdown())


if __name__ == "__main__":
    sys.exit(main())
