"""Create an admin account, or promote an existing user to admin.

Usage:
    python -m backend.create_admin EMAIL PASSWORD [NAME]
"""
import sys

from backend.database import Base, SessionLocal, engine
from backend.models.user import ADMIN_ROLE
from backend.services import accounts


def create_or_promote_admin(db, email: str, password: str, name: str = "Administrator"):
    """An existing account keeps its password; only its role and active flag change."""
    user = accounts.get_user_by_email(db, email)
    if user is None:
        user = accounts.register_user(db, name=name, email=email, password=password)
    user.role = ADMIN_ROLE
    user.is_active = True
    db.commit()
    db.refresh(user)
    return user


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if len(args) not in (2, 3):
        print(__doc__.strip(), file=sys.stderr)
        sys.exit(2)

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        admin = create_or_promote_admin(db, *args)
    finally:
        db.close()
    print(f"Admin ready: {admin.email} (id={admin.id})")


if __name__ == "__main__":
    main()
