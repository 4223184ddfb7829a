import sys

from giftlists.config import settings
from giftlists.database import SessionLocal, engine, Base
from giftlists.errors import NotFound
from giftlists.models import User  # noqa: F401
from giftlists.notifier import InviteNotifier
from giftlists.services.identity import IdentityStore


def main():
    Base.metadata.create_all(bind=engine)

    email = input("Email: ").strip()
    name = input("Name: ").strip()

    if not all([email, name]):
        print("All fields are required.")
        sys.exit(1)

    db = SessionLocal()
    try:
        identity = IdentityStore(db)
        try:
            identity.resolve_user_by_email(email)
        except NotFound:
            pass
        else:
            print(f"User with email {email} already exists.")
            sys.exit(1)

        user, token = identity.create_user(email, name, can_create=True)
        db.commit()
        print(f"User '{name}' created with list creation rights.")
        print(f"Login link: {InviteNotifier(settings).login_link(token)}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
