"""Mint a dashboard JWT for local testing.

Usage:
    python -m scripts.issue_token <email> [display_name] [--teacher] [--minutes N]
Signs with SECRET_KEY / ALGORITHM from the environment (or .env) and prints
the token, ready for the X-JWT header.
"""

import argparse
import sys
from datetime import timedelta

from tresor.core.config import get_settings
from tresor.infrastructure.security.jwt import create_access_token


def main() -> None:
    """Print a signed token for the given email."""
    parser = argparse.ArgumentParser(description="Issue a dashboard JWT")
    parser.add_argument("email")
    parser.add_argument("display_name", nargs="?")
    parser.add_argument("--teacher", action="store_true")
    parser.add_argument("--minutes", type=int, default=None)
    args = parser.parse_args()

    settings = get_settings()
    minutes = args.minutes or settings.access_token_expire_minutes
    token = create_access_token(
        args.email,
        display_name=args.display_name,
        teacher=args.teacher,
        expires_delta=timedelta(minutes=minutes),
    )
    print(token)
    print(f"{settings.jwt_header_name}: <token> (valid {minutes} min)", file=sys.stderr)


if __name__ == "__main__":
    main()
