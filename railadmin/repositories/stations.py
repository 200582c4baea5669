import logging

from sqlalchemy.exc import SQLAlchemyError

from .. import models
from ..entities import Station
from .base import Repository

logger = logging.getLogger(__name__)


def to_entity(row):
    return Station(row.name, row.platform_count)


class StationRepository(Repository):

    def save(self, station: Station) -> bool:
        if not self.is_connected:
            return False

        #1. an existing station is updated instead of inserted
        if self.find_by_name(station.name) is not None:
            return self.update(station)

        #2. insert
        try:
            self.db.add(models.Station(name=station.name, platform_count=station.platform_count))
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("saving station", e)
            return False

        return True


    def find_all(self):
        if not self.is_connected:
            return []
        try:
            rows = self.db.query(models.Station).all()
        except SQLAlchemyError as e:
            self._fail("finding stations", e)
            return []

        return [to_entity(row) for row in rows]


    def find_by_name(self, name):
        if not self.is_connected:
            return None
        try:
            row = self.db.query(models.Station).filter(models.Station.name == name).first()
        except SQLAlchemyError as e:
            self._fail("finding station", e)
            return None

        return to_entity(row) if row else None


    def update(self, station: Station) -> bool:
        if not self.is_connected:
            return False
        try:
            count = self.db.query(models.Station).filter(
                models.Station.name == station.name
            ).update({models.Station.platform_count: station.platform_count}, synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("updating station", e)
            return False

        return count > 0


    def delete(self, name) -> bool:
        if not self.is_connected:
            return False
        try:
            count = self.db.query(models.Station).filter(
                models.Station.name == name
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("deleting station", e)
            return False

        return count > 0


    def clear_all(self):
        if not self.is_connected:
            return
        try:
            self.db.query(models.Station).delete(synchronize_session=False)
            self.db.commit()
            logger.info("All stations cleared from database")
        except SQLAlchemyError as e:
            self._fail("clearing stations", e)
