"""
Promote a user to admin by email.
Usage: python -m jobboard.scripts.promote_admin user@example.com
"""
import sys

from jobboard.core.enums import Role
from jobboard.database import SessionLocal, ensure_tables_exist
from jobboard.repos.user_repo import get_by_email, set_role


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("Usage: python -m jobboard.scripts.promote_admin <email>")
        sys.exit(1)
    email = argv[0].strip()
    ensure_tables_exist()
    db = SessionLocal()
    try:
        user = get_by_email(db, email)
        if not user:
            print(f"User not found: {email}")
            sys.exit(1)
        set_role(db, user, Role.ADMIN)
        print(f"Promoted {email} to admin.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
