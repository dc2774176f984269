#!/usr/bin/env python3
"""
Create an admin account.

Registration through the API only creates regular users.
Usage: python scripts/create_admin.py <username> <password> [--email EMAIL]
"""
import argparse
import sys

from alumni_api.core.auth import TokenManager
from alumni_api.core.config import get_settings
from alumni_api.core.errors import AppError
from alumni_api.schemas.schemas import RegisterRequest, UserRole
from alumni_api.services.auth_service import AuthService


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an admin account")
    parser.add_argument("username")
    parser.add_argument("password")
    parser.add_argument("--email", default=None)
    args = parser.parse_args()

    service = AuthService(TokenManager.from_settings(get_settings()))
    request = RegisterRequest(username=args.username, password=args.password, email=args.email)
    try:
        user = service.register(request, role=UserRole.admin)
    except AppError as e:
        print(f"Failed: {e.message}")
        return 1

    print(f"Admin '{user.username}' created (id={user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
