import pytest
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from giftlists.config import settings
from giftlists.database import Base, build_engine
from giftlists.dependencies import get_db, get_notifier, create_access_token
from giftlists.main import app
from giftlists.models import User  # noqa: F401
from giftlists.services.identity import IdentityStore
from giftlists.services.lists import ListStore

test_engine = build_engine(settings.test_database_url)
TestSession = sessionmaker(bind=test_engine, join_transaction_mode="create_savepoint")


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def send_invite(self, invitation):
        self.sent.append(invitation)


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db():
    connection = test_engine.connect()
    transaction = connection.begin()
    session = TestSession(bind=connection)
    yield session
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(db, notifier):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def identity(db):
    return IdentityStore(db)


@pytest.fixture
def lists(db):
    return ListStore(db)


@pytest.fixture
def owner_user(identity):
    user, _ = identity.create_user("owner@test.com", "Owner", can_create=True)
    return user


@pytest.fixture
def member_user(identity):
    user, _ = identity.create_user("member@test.com", "Member")
    return user


@pytest.fixture
def other_user(identity):
    user, _ = identity.create_user("other@test.com", "Other")
    return user


@pytest.fixture
def outsider_user(identity):
    user, _ = identity.create_user("outsider@test.com", "Outsider")
    return user


@pytest.fixture
def birthday_list(lists, owner_user, member_user, other_user):
    gift_list = lists.create_list("Birthday", owner_user.user_uuid)
    lists.add_member(gift_list.list_uuid, member_user.user_uuid)
    lists.add_member(gift_list.list_uuid, other_user.user_uuid)
    return gift_list


@pytest.fixture
def member_gift(lists, birthday_list, member_user):
    return lists.create_gift(
        birthday_list.list_uuid, member_user.user_uuid, "http://x", "socks"
    )


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def owner_headers(owner_user):
    return auth_headers(owner_user)


@pytest.fixture
def member_headers(member_user):
    return auth_headers(member_user)


@pytest.fixture
def other_headers(other_user):
    return auth_headers(other_user)


@pytest.fixture
def outsider_headers(outsider_user):
    return auth_headers(outsider_user)
