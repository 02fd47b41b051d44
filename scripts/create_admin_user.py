#!/usr/bin/env python3
"""
Create an admin account interactively.

Public admin registration is disabled by default, so this is how the first
admin gets into a fresh database.
"""

import getpass
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from wellness import crud  # noqa: E402
from wellness.core.access import normalize_email  # noqa: E402
from wellness.db.session import SessionLocal  # noqa: E402
from wellness.models.user import Role  # noqa: E402


def create_admin_user() -> int:
    print("👤 Creating admin user")
    print("=" * 50)

    email = normalize_email(input("Email: "))
    if not email:
        print("❌ Email is required")
        return 1
    name = input("Display name: ").strip() or email.split("@")[0]
    password = getpass.getpass("Password: ")
    if not password:
        print("❌ Password is required")
        return 1
    if password != getpass.getpass("Confirm Password: "):
        print("❌ Passwords do not match")
        return 1

    db = SessionLocal()
    try:
        if crud.user.get_by_email(db, email=email):
            print(f"❌ A user with email {email} already exists")
            return 1
        admin = crud.user.create(db, name=name, email=email, password=password, role=Role.ADMIN)
        db.commit()
        print("✅ Admin user created")
        print(f"   ID: {admin.id}")
        print(f"   Email: {admin.email}")
        print(f"   Name: {admin.name}")
        return 0
    except Exception as e:
        db.rollback()
        print(f"❌ Error creating admin user: {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(create_admin_user())
