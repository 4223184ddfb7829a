import sys

from giftlists.database import SessionLocal
from giftlists.errors import NotFound
from giftlists.models import User  # noqa: F401
from giftlists.services.identity import IdentityStore


def main():
    email = input("Email of user to delete: ").strip()
    if not email:
        print("Email is required.")
        sys.exit(1)

    db = SessionLocal()
    try:
        identity = IdentityStore(db)
        try:
            user = identity.resolve_user_by_email(email)
        except NotFound:
            print(f"No user with email {email}.")
            sys.exit(1)

        if input(f"Delete {user.name} and all their lists? [y/N] ").strip().lower() != "y":
            print("Aborted.")
            return
        name = user.name
        identity.delete_user(user.user_uuid)
        db.commit()
        print(f"User '{name}' deleted.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
