import logging

from sqlalchemy.exc import SQLAlchemyError

from .. import models
from ..entities import Train
from .base import Repository

logger = logging.getLogger(__name__)


def to_entity(row):
    return Train(row.number, row.type, row.capacity)


class TrainRepository(Repository):

    def save(self, train: Train) -> bool:
        # straight insert, a duplicate number is rejected by the primary key
        if not self.is_connected:
            return False
        try:
            self.db.add(models.Train(number=train.number, type=train.type, capacity=train.capacity))
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("saving train", e)
            return False

        return True


    def find_all(self):
        if not self.is_connected:
            return []
        try:
            rows = self.db.query(models.Train).all()
        except SQLAlchemyError as e:
            self._fail("finding trains", e)
            return []

        return [to_entity(row) for row in rows]


    def find_by_number(self, number):
        if not self.is_connected:
            return None
        try:
            row = self.db.query(models.Train).filter(models.Train.number == number).first()
        except SQLAlchemyError as e:
            self._fail("finding train", e)
            return None

        return to_entity(row) if row else None


    def update(self, train: Train) -> bool:
        if not self.is_connected:
            return False
        try:
            count = self.db.query(models.Train).filter(
                models.Train.number == train.number
            ).update({
                models.Train.type: train.type,
                models.Train.capacity: train.capacity,
            }, synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("updating train", e)
            return False

        return count > 0


    def delete(self, number) -> bool:
        if not self.is_connected:
            return False
        try:
            count = self.db.query(models.Train).filter(
                models.Train.number == number
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("deleting train", e)
            return False

        return count > 0


    def clear_all(self):
        if not self.is_connected:
            return
        try:
            self.db.query(models.Train).delete(synchronize_session=False)
            self.db.commit()
            logger.info("All trains cleared from database")
        except SQLAlchemyError as e:
            self._fail("clearing trains", e)
