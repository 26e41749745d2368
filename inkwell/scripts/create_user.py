"""
Create a user from the command line. Run from project root:
  python -m inkwell.scripts.create_user USERNAME PASSWORD
"""
import argparse
import logging
import sys

from inkwell.core.config import get_settings
from inkwell.core.database import SessionLocal
from inkwell.core.exceptions import DuplicateUsername, StoreError
from inkwell.schemas.auth import PASSWORD_MAX_LEN, USERNAME_MAX_LEN, normalize_username
from inkwell.services.users import UserService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Inkwell user.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password (1-{PASSWORD_MAX_LEN} chars)")
    args = parser.parse_args(argv)

    try:
        username = normalize_username(args.username)
    except ValueError as e:
        print(f"{e}.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be 1-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        users = UserService(db, bcrypt_rounds=get_settings().BCRYPT_ROUNDS)
        user = users.signup(username, args.password)
        print(f"Created user '{user.username}' (id={user.id}).")
        return 0
    except DuplicateUsername:
        print(f"User '{username}' already exists.", file=sys.stderr)
        return 1
    except StoreError as e:
        logger.exception("Could not create user: %s", e.cause or e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
