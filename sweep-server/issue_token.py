"""
Issue an operator bearer token for the sweep API.

Example:
    python issue_token.py --subject ops-alice --minutes 60
"""
import argparse
from datetime import timedelta

from app.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue an operator bearer token")
    parser.add_argument("--subject", required=True, help="operator identifier stored in the token")
    parser.add_argument("--role", default="operator")
    parser.add_argument("--minutes", type=int, default=None, help="lifetime, defaults to SECURITY__ACCESS_TOKEN_EXPIRE_MINUTES")
    args = parser.parse_args()

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    print(create_access_token(args.subject, role=args.role, expires_delta=expires))


if __name__ == "__main__":
    main()
