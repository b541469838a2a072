#!/usr/bin/env python3
# =============================================================================
# scripts/init_admin.py - Create or Reset the Admin Account
# =============================================================================
# Creates the dashboard admin, or rotates its password if the username
# already exists (which also signs out all of its sessions).
#
# Usage:
#   python scripts/init_admin.py                 # ADMIN_USERNAME / ADMIN_PASSWORD
#   python scripts/init_admin.py alice           # generated password
#   python scripts/init_admin.py alice s3cret!!
#
# Uses DATABASE_URL and BCRYPT_ROUNDS from the environment (.env file).
# =============================================================================

import os
import secrets
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import settings
from core.models.auth import MAX_PASSWORD_BYTES
from core.services.auth_service import AuthService
from lib.database import create_db_engine, create_session_factory, init_db, session_scope

DEFAULT_USERNAME = "admin"


def main() -> int:
    args = sys.argv[1:]
    username = args[0] if args else os.getenv("ADMIN_USERNAME", DEFAULT_USERNAME)
    password = args[1] if len(args) > 1 else os.getenv("ADMIN_PASSWORD")
    generated = password is None
    if generated:
        password = secrets.token_urlsafe(18)

    if len(password) < 8 or len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        print(f"ERROR: password must be 8 to {MAX_PASSWORD_BYTES} bytes long")
        return 1

    engine = create_db_engine(settings.DATABASE_URL, connect_timeout=settings.DATABASE_CONNECT_TIMEOUT)
    init_db(engine)

    try:
        with session_scope(create_session_factory(engine)) as db:
            admin, created = AuthService.upsert_admin(db, username, password, rounds=settings.BCRYPT_ROUNDS)
    finally:
        engine.dispose()

    print("Admin user created" if created else "Admin password updated (existing sessions signed out)")
    print(f"   Username: {admin.username}")
    if generated:
        print(f"   Password: {password}")
        print("   Store this password now; it is not shown again.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
