#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify MongoDB is reachable with the current settings.
Usage: python scripts/check_connections.py
"""
import sys

from alumni_api.core.config import get_settings
from alumni_api.db.mongodb import test_mongo_connection


def main() -> int:
    settings = get_settings()
    print("=" * 50)
    print("ALUMNI API - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    ok = test_mongo_connection()
    print("    MongoDB: CONNECTED" if ok else "    MongoDB: FAILED")

    print("\n[2] Upload directory...")
    print(f"    Path: {settings.upload_dir}")

    print("\n" + "=" * 50)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
