import logging

from sqlalchemy.exc import SQLAlchemyError

from .. import models
from ..entities import Admin, Customer, User
from .base import Repository

logger = logging.getLogger(__name__)


def to_entity(row):
    if row.user_type == Admin.user_type:
        return Admin(row.username, row.password)
    if row.user_type == Customer.user_type:
        return Customer(row.username, row.password, row.full_name, row.email)
    logger.warning("Skipping user %s with unknown type %s", row.username, row.user_type)
    return None


def to_row(user: User):
    row = models.User(username=user.username, password=user.password, user_type=user.user_type)
    if isinstance(user, Customer):
        row.full_name = user.full_name
        row.email = user.email
    return row


class UserRepository(Repository):

    def save(self, user: User) -> bool:
        if not self.is_connected:
            return False
        try:
            #1. existing username -> update instead
            exists = self.db.query(models.User.username).filter(
                models.User.username == user.username
            ).first()
        except SQLAlchemyError as e:
            self._fail("saving user", e)
            return False

        if exists:
            return self.update(user)

        #2. insert
        try:
            self.db.add(to_row(user))
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("saving user", e)
            return False

        return True


    def find_all(self):
        if not self.is_connected:
            return []
        try:
            rows = self.db.query(models.User).all()
        except SQLAlchemyError as e:
            self._fail("finding users", e)
            return []

        users = [to_entity(row) for row in rows]
        return [user for user in users if user is not None]


    def find_by_username(self, username):
        if not self.is_connected:
            return None
        try:
            row = self.db.query(models.User).filter(models.User.username == username).first()
        except SQLAlchemyError as e:
            self._fail("finding user", e)
            return None

        return to_entity(row) if row else None


    def update(self, user: User) -> bool:
        if not self.is_connected:
            return False

        values = {models.User.password: user.password}
        if isinstance(user, Customer):
            values[models.User.full_name] = user.full_name
            values[models.User.email] = user.email
        elif not isinstance(user, Admin):
            return False

        try:
            count = self.db.query(models.User).filter(
                models.User.username == user.username
            ).update(values, synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("updating user", e)
            return False

        return count > 0


    def delete(self, username) -> bool:
        if not self.is_connected:
            return False
        try:
            count = self.db.query(models.User).filter(
                models.User.username == username
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("deleting user", e)
            return False

        return count > 0


    def clear_all(self):
        if not self.is_connected:
            return
        try:
            self.db.query(models.User).delete(synchronize_session=False)
            self.db.commit()
            logger.info("All users cleared from database")
        except SQLAlchemyError as e:
            self._fail("clearing users", e)


    def clear_all_except_admin(self) -> int:
        if not self.is_connected:
            return 0
        try:
            count = self.db.query(models.User).filter(
                models.User.user_type != Admin.user_type
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("clearing customer accounts", e)
            return 0

        logger.info("%d customers cleared from database", count)
        return count
