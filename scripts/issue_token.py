#!/usr/bin/env python3
"""Print a bearer token for a user id (development aid)."""

import argparse
import sys
from pathlib import Path

# Add parent directory to path to import recallguard modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from recallguard.core.config import settings
from recallguard.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue an access token for a user id")
    parser.add_argument(
        "--user-id",
        type=int,
        default=settings.SEED_DEMO_USER_ID,
        help=f"User id to put in the token subject (default: {settings.SEED_DEMO_USER_ID})",
    )
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    args = parser.parse_args()

    if settings.ENV == "prod":
        print("Refusing to issue tokens with ENV=prod", file=sys.stderr)
        sys.exit(1)

    print(create_access_token(args.user_id, expires_minutes=args.expires_minutes))


if __name__ == "__main__":
    main()
