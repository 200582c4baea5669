import logging

from .entities import Route, Schedule, Station, Train
from .services import StationService, UserService

logger = logging.getLogger(__name__)


STATIONS = [
    {"name": "Bucharest North", "platform_count": 5},
    {"name": "Constanta", "platform_count": 3},
    {"name": "Brasov", "platform_count": 4},
]

TRAINS = [
    {"number": "IR1582", "type": "InterRegio", "capacity": 120},
    {"number": "R9351", "type": "Regio", "capacity": 80},
]

ROUTES = [
    {"origin": "Bucharest North", "destination": "Constanta", "base_price": 225.0},
    {"origin": "Bucharest North", "destination": "Brasov", "base_price": 166.0},
]

SCHEDULES = [
    {"train": "IR1582", "origin": "Bucharest North", "destination": "Constanta",
     "departure_time": "08:00", "arrival_time": "10:30", "platform_number": 1},
    {"train": "R9351", "origin": "Bucharest North", "destination": "Brasov",
     "departure_time": "09:15", "arrival_time": "11:45", "platform_number": 3},
]


def seed_network(network: StationService):
    """Add the sample stations, trains and routes when there are no stations yet."""
    if network.stations:
        return False

    stations = {}
    for s_data in STATIONS:
        stations[s_data["name"]] = network.add_station(Station(**s_data))

    for t_data in TRAINS:
        network.add_train(Train(**t_data))

    for r_data in ROUTES:
        network.add_route(Route(stations[r_data["origin"]], stations[r_data["destination"]], r_data["base_price"]))

    logger.info("Seeded %d stations, %d trains and %d routes", len(STATIONS), len(TRAINS), len(ROUTES))
    return True


def seed_schedules(network: StationService):
    """Schedules are never persisted, so they are added again on every start
    as long as their train and route exist."""
    if network.schedules:
        return 0

    count = 0
    for s_data in SCHEDULES:
        train = network.find_train(s_data["train"])
        route = network.find_route(s_data["origin"], s_data["destination"])
        if train is None or route is None:
            continue
        network.add_schedule(Schedule(train, route, s_data["departure_time"],
                                      s_data["arrival_time"], s_data["platform_number"]))
        count += 1
    return count


def seed_users(users: UserService):
    added = False
    if users.find_user("admin") is None:
        users.register_admin("admin", "admin123")
        added = True
    if users.find_user("john") is None:
        users.register_customer("john", "john123!x", "John Doe", "john@example.com")
        added = True
    return added


def seed_data(network: StationService, users: UserService):
    seeded = seed_network(network)
    if seeded:
        seed_users(users)
    seed_schedules(network)
    return seeded
