import logging

from sqlalchemy.exc import SQLAlchemyError

from .. import models
from ..entities import Route, Station
from .base import Repository
from .stations import StationRepository

logger = logging.getLogger(__name__)


class RouteRepository(Repository):

    def __init__(self, db, station_repository: StationRepository | None = None):
        super().__init__(db)
        self.station_repository = station_repository or StationRepository(db)


    def save(self, route: Route) -> bool:
        if not self.is_connected:
            return False

        #1. make sure both stations exist before the route references them
        # (two separate inserts, a half-saved pair is possible)
        for station in (route.origin, route.destination):
            if self.station_repository.find_by_name(station.name) is None:
                if not self.station_repository.save(station):
                    logger.debug("Station %s was not saved alongside route %s", station.name, route.key)

        #2. insert the route itself
        try:
            self.db.add(models.Route(
                origin_station=route.origin.name,
                destination_station=route.destination.name,
                base_price=route.base_price,
            ))
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("saving route", e)
            return False

        return True


    def _to_entity(self, row):
        # station rows can be gone when the store does not enforce foreign keys
        if row.origin is None or row.destination is None:
            return None
        return Route(
            Station(row.origin.name, row.origin.platform_count),
            Station(row.destination.name, row.destination.platform_count),
            row.base_price,
        )


    def find_all(self):
        if not self.is_connected:
            return []
        try:
            rows = self.db.query(models.Route).order_by(models.Route.id).all()
            routes = [self._to_entity(row) for row in rows]
        except SQLAlchemyError as e:
            self._fail("finding routes", e)
            return []

        return [route for route in routes if route is not None]


    def find_by_stations(self, origin_name, destination_name):
        if not self.is_connected:
            return None
        try:
            row = self.db.query(models.Route).filter(
                models.Route.origin_station == origin_name,
                models.Route.destination_station == destination_name,
            ).first()
            return self._to_entity(row) if row else None
        except SQLAlchemyError as e:
            self._fail("finding route", e)
            return None


    def update_price(self, route: Route, new_price: float) -> bool:
        if not self.is_connected:
            return False
        try:
            count = self.db.query(models.Route).filter(
                models.Route.origin_station == route.origin.name,
                models.Route.destination_station == route.destination.name,
            ).update({models.Route.base_price: new_price}, synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("updating route price", e)
            return False

        return count > 0


    def update(self, route: Route) -> bool:
        return self.update_price(route, route.base_price)


    def delete(self, route: Route) -> bool:
        if not self.is_connected:
            return False
        try:
            count = self.db.query(models.Route).filter(
                models.Route.origin_station == route.origin.name,
                models.Route.destination_station == route.destination.name,
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("deleting route", e)
            return False

        return count > 0


    def clear_all(self):
        if not self.is_connected:
            return
        try:
            self.db.query(models.Route).delete(synchronize_session=False)
            self.db.commit()
            logger.info("All routes cleared from database")
        except SQLAlchemyError as e:
            self._fail("clearing routes", e)
