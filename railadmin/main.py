import logging
import sys

from . import database
from .config import get_log_level
from .menu import Menu
from .repositories import RouteRepository, StationRepository, TrainRepository, UserRepository
from .seed import seed_data
from .services import AuditService, StationService, TicketService, UserService


def build_services(db):
    station_repository = StationRepository(db)
    station_service = StationService(
        station_repository=station_repository,
        train_repository=TrainRepository(db),
        route_repository=RouteRepository(db, station_repository),
    )
    user_service = UserService(UserRepository(db))
    return user_service, station_service, TicketService()


def main():
    logging.basicConfig(
        level=get_log_level(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("Train Station Management System")

    db = database.connect()
    if db is None:
        print("Running in memory mode - database not connected.")

    users, network, tickets = build_services(db)
    seed_data(network, users)

    audit = AuditService()
    try:
        Menu(users, network, tickets, audit).start()
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye!")
    finally:
        audit.close()
        database.close(db)


if __name__ == "__main__":
    main()
