"""Tests for the table repositories against an in-memory SQLite store."""

import pytest

from railadmin.entities import Admin, Customer, Route, Station, Train
from railadmin.repositories import RouteRepository, StationRepository, TrainRepository, UserRepository


@pytest.fixture
def stations(db) -> StationRepository:
    return StationRepository(db)


@pytest.fixture
def trains(db) -> TrainRepository:
    return TrainRepository(db)


@pytest.fixture
def routes(db, stations) -> RouteRepository:
    return RouteRepository(db, stations)


@pytest.fixture
def users(db) -> UserRepository:
    return UserRepository(db)


#------------------------STATIONS------------------------
def test_station_round_trip(stations: StationRepository) -> None:
    assert stations.save(Station("Central", 3)) is True

    loaded = stations.find_by_name("Central")

    assert loaded.name == "Central"
    assert [p.number for p in loaded.platforms] == [1, 2, 3]


def test_station_save_updates_existing(stations: StationRepository) -> None:
    """Given a saved station, when saving the same name again, then the row is updated."""
    stations.save(Station("Central", 3))
    stations.save(Station("Central", 6))

    all_stations = stations.find_all()

    assert len(all_stations) == 1
    assert all_stations[0].platform_count == 6


def test_station_update_and_delete_report_affected_rows(stations: StationRepository) -> None:
    assert stations.update(Station("Ghost", 1)) is False
    assert stations.delete("Ghost") is False

    stations.save(Station("Central", 3))

    assert stations.update(Station("Central", 4)) is True
    assert stations.delete("Central") is True
    assert stations.find_by_name("Central") is None


def test_station_referenced_by_route_cannot_be_deleted(stations, routes, route) -> None:
    routes.save(route)

    assert stations.delete("Central") is False
    # the session is still usable after the rolled back failure
    assert stations.find_by_name("Central") is not None


#------------------------TRAINS------------------------
def test_train_round_trip(trains: TrainRepository) -> None:
    trains.save(Train("IR1582", "InterRegio", 120))

    loaded = trains.find_by_number("IR1582")

    assert (loaded.number, loaded.type, loaded.capacity) == ("IR1582", "InterRegio", 120)


def test_train_duplicate_is_rejected_not_updated(trains: TrainRepository) -> None:
    """Given a saved train, when inserting the same number, then the insert fails and the row is kept."""
    assert trains.save(Train("IR1582", "InterRegio", 120)) is True
    assert trains.save(Train("IR1582", "Regio", 80)) is False

    all_trains = trains.find_all()

    assert len(all_trains) == 1
    assert all_trains[0].type == "InterRegio"


def test_train_update_and_delete(trains: TrainRepository) -> None:
    trains.save(Train("R9351", "Regio", 80))

    assert trains.update(Train("R9351", "RegioExpress", 90)) is True
    assert trains.find_by_number("R9351").capacity == 90
    assert trains.delete("R9351") is True
    assert trains.delete("R9351") is False


def test_train_clear_all(trains: TrainRepository) -> None:
    trains.save(Train("R1", "Regio", 80))
    trains.save(Train("R2", "Regio", 80))

    trains.clear_all()

    assert trains.find_all() == []


#------------------------ROUTES------------------------
def test_route_save_inserts_missing_stations(stations, routes, route) -> None:
    """Given no stations, when saving a route, then both stations are created first."""
    assert routes.save(route) is True

    assert stations.find_by_name("Central").platform_count == 3
    assert stations.find_by_name("North").platform_count == 2


def test_route_save_keeps_existing_station(stations, routes, route) -> None:
    stations.save(Station("Central", 8))

    routes.save(route)

    assert stations.find_by_name("Central").platform_count == 8


def test_route_round_trip(routes, route) -> None:
    routes.save(route)

    loaded = routes.find_by_stations("Central", "North")

    assert loaded.origin.name == "Central"
    assert loaded.destination.name == "North"
    assert loaded.origin.platform_count == 3
    assert loaded.base_price == 100.0


def test_route_is_one_way(routes, route) -> None:
    routes.save(route)

    assert routes.find_by_stations("North", "Central") is None


def test_route_duplicate_is_rejected(routes, route, central, north) -> None:
    routes.save(route)

    assert routes.save(Route(central, north, 55.0)) is False
    assert len(routes.find_all()) == 1
    assert routes.find_all()[0].base_price == 100.0


def test_route_update_price(routes, route) -> None:
    routes.save(route)

    assert routes.update_price(route, 120.5) is True
    assert routes.find_by_stations("Central", "North").base_price == 120.5


def test_route_update_price_of_unknown_route(routes, central, north) -> None:
    assert routes.update_price(Route(central, north, 1.0), 2.0) is False


def test_route_delete_and_clear(routes, route, central) -> None:
    routes.save(route)
    routes.save(Route(central, Station("West", 1), 30.0))

    assert routes.delete(route) is True
    assert [r.destination.name for r in routes.find_all()] == ["West"]

    routes.clear_all()

    assert routes.find_all() == []


#------------------------USERS------------------------
def test_customer_round_trip(users: UserRepository, customer: Customer) -> None:
    users.save(customer)

    loaded = users.find_by_username("maria")

    assert isinstance(loaded, Customer)
    assert loaded.password == "abcd123!"
    assert loaded.full_name == "Maria Pop"
    assert loaded.email == "maria@railmail.ro"


def test_admin_round_trip(users: UserRepository) -> None:
    users.save(Admin("admin", "admin123"))

    loaded = users.find_by_username("admin")

    assert isinstance(loaded, Admin)
    assert loaded.authenticate("admin123")


def test_user_save_updates_existing(users: UserRepository, customer: Customer) -> None:
    users.save(customer)

    users.save(Customer("maria", "wxyz987?", "Maria Ionescu", "maria.i@railmail.ro"))

    loaded = users.find_by_username("maria")
    assert loaded.password == "wxyz987?"
    assert loaded.full_name == "Maria Ionescu"
    assert len(users.find_all()) == 1


def test_user_delete(users: UserRepository, customer: Customer) -> None:
    users.save(customer)

    assert users.delete("maria") is True
    assert users.delete("maria") is False
    assert users.find_by_username("maria") is None


def test_clear_all_except_admin(users: UserRepository, customer: Customer) -> None:
    users.save(Admin("admin", "admin123"))
    users.save(customer)
    users.save(Customer("ion", "abcd123!", "Ion Pop", "ion@railmail.ro"))

    assert users.clear_all_except_admin() == 2
    assert [u.username for u in users.find_all()] == ["admin"]

    users.clear_all()

    assert users.find_all() == []


#------------------------DISCONNECTED------------------------
def test_disconnected_repositories_are_no_ops(route, customer) -> None:
    """Given no session, when calling any operation, then empty results come back."""
    stations = StationRepository(None)
    trains = TrainRepository(None)
    routes = RouteRepository(None)
    users = UserRepository(None)

    assert not stations.is_connected
    assert stations.save(Station("Central", 3)) is False
    assert stations.find_all() == []
    assert stations.find_by_name("Central") is None
    assert stations.update(Station("Central", 3)) is False
    assert stations.delete("Central") is False
    stations.clear_all()

    assert trains.save(Train("R1", "Regio", 1)) is False
    assert trains.find_by_number("R1") is None

    assert routes.save(route) is False
    assert routes.find_all() == []
    assert routes.find_by_stations("Central", "North") is None
    assert routes.update_price(route, 1.0) is False

    assert users.save(customer) is False
    assert users.find_all() == []
    assert users.update(customer) is False
    assert users.clear_all_except_admin() == 0
