import logging

from ..entities import Reservation
from ..repositories import RouteRepository, StationRepository, TrainRepository

logger = logging.getLogger(__name__)


class StationService:
    """In-memory view of the network.

    Stations, trains and routes are loaded from their repositories (when
    given) and written through on every add. Schedules and reservations only
    live for the lifetime of the process.
    """

    def __init__(self, station_repository: StationRepository | None = None,
                 train_repository: TrainRepository | None = None,
                 route_repository: RouteRepository | None = None):
        self.station_repository = station_repository
        self.train_repository = train_repository
        self.route_repository = route_repository

        self._stations = []
        self._trains = []
        self._routes = {}          # "origin-destination" -> Route
        self._schedules = []
        self._reservations = []

        self.reload()


    def reload(self):
        """Replace the persisted collections with what the stores hold."""
        if self.station_repository is not None:
            self._stations = self.station_repository.find_all()
        if self.train_repository is not None:
            self._trains = self.train_repository.find_all()
        if self.route_repository is not None:
            self._routes = {route.key: route for route in self.route_repository.find_all()}
        for route in self._routes.values():
            self._link_stations(route)


    def _link_stations(self, route):
        # routes share the Station objects held in _stations
        route.origin = self.find_station(route.origin.name) or route.origin
        route.destination = self.find_station(route.destination.name) or route.destination


    #------------------------STATIONS------------------------
    def add_station(self, station):
        existing = self.find_station(station.name)
        if existing is not None:
            self._stations[self._stations.index(existing)] = station
            for route in self._routes.values():
                self._link_stations(route)
        else:
            self._stations.append(station)

        if self.station_repository is not None:
            self.station_repository.save(station)
        return station

    @property
    def stations(self):
        return list(self._stations)

    def find_station(self, name):
        for station in self._stations:
            if station.name == name:
                return station
        return None


    #------------------------TRAINS------------------------
    def add_train(self, train):
        if self.find_train(train.number) is not None:
            logger.warning("Train %s already exists", train.number)
            return False

        self._trains.append(train)
        if self.train_repository is not None:
            self.train_repository.save(train)
        return True

    @property
    def trains(self):
        return list(self._trains)

    def find_train(self, number):
        for train in self._trains:
            if train.number == number:
                return train
        return None


    #------------------------ROUTES------------------------
    def add_route(self, route):
        if route.key in self._routes:
            return False

        self._link_stations(route)
        self._routes[route.key] = route
        if self.route_repository is not None:
            self.route_repository.save(route)
        return True

    @property
    def routes(self):
        # ordered by "origin-destination" only for a stable listing
        return [self._routes[key] for key in sorted(self._routes)]

    def find_route(self, origin_name, destination_name):
        return self._routes.get(f"{origin_name}-{destination_name}")

    def update_route_price(self, route, new_price):
        for r in self._routes.values():
            if r.origin.name == route.origin.name and r.destination.name == route.destination.name:
                r.base_price = new_price
                if self.route_repository is not None:
                    self.route_repository.update_price(r, new_price)
                return True
        return False


    #------------------------SCHEDULES------------------------
    def add_schedule(self, schedule):
        self._schedules.append(schedule)
        return schedule

    @property
    def schedules(self):
        return list(self._schedules)

    def find_schedules_by_destination(self, destination):
        destination = destination.lower()
        return [s for s in self._schedules if s.route.destination.name.lower() == destination]


    #------------------------RESERVATIONS------------------------
    def reserve_seat(self, customer, schedule, seat_number):
        # the same seat can be reserved twice, nothing is checked against other reservations
        reservation = Reservation(customer, schedule, seat_number)
        self._reservations.append(reservation)
        return reservation

    @property
    def reservations(self):
        return list(self._reservations)

    def reservations_for(self, customer):
        return [r for r in self._reservations if r.customer == customer]

    def find_reservation(self, reservation_id):
        for reservation in self._reservations:
            if reservation.id == reservation_id:
                return reservation
        return None

    def confirm_reservation(self, reservation_id):
        reservation = self.find_reservation(reservation_id)
        if reservation is None:
            return False
        reservation.confirm()
        return True

    def cancel_reservation(self, reservation_id):
        # back to unconfirmed, the reservation is kept
        reservation = self.find_reservation(reservation_id)
        if reservation is None:
            return False
        reservation.cancel()
        return True


    def clear_all(self):
        """Administrative reset: wipes the stores and every in-memory collection."""
        # routes reference stations, clear them first
        if self.route_repository is not None:
            self.route_repository.clear_all()
        if self.train_repository is not None:
            self.train_repository.clear_all()
        if self.station_repository is not None:
            self.station_repository.clear_all()

        self._stations = []
        self._trains = []
        self._routes = {}
        self._schedules = []
        self._reservations = []
