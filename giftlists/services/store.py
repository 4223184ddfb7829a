import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from giftlists.errors import StoreFailure

logger = logging.getLogger("giftlists.store")


class Store:
    """Base for the services; each holds the request's database session."""

    def __init__(self, db: Session):
        self.db = db

    def _flush(self) -> None:
        try:
            self.db.flush()
        except SQLAlchemyError as exc:
            logger.error("Store write failed: %s", exc)
            raise StoreFailure() from exc

    def _execute(self, statement):
        try:
            return self.db.execute(statement)
        except SQLAlchemyError as exc:
            logger.error("Store statement failed: %s", exc)
            raise StoreFailure() from exc
