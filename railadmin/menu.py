from pydantic import ValidationError

from . import schemas
from .entities import Customer, Route, Schedule, Station, Train
from .errors import DuplicateUserError
from .pricing import ticket_price
from .prompts import Prompter
from .services import AuditService, StationService, TicketService, UserService


class Menu:
    """Numbered console menus on top of the services.

    Every completed user action is written to the audit trail.
    """

    def __init__(self, user_service: UserService, station_service: StationService,
                 ticket_service: TicketService, audit: AuditService, prompter: Prompter | None = None):
        self.users = user_service
        self.network = station_service
        self.tickets = ticket_service
        self.audit = audit
        self.io = prompter or Prompter()


    def _done(self, action, message=None):
        self.audit.log_action(action)
        if message:
            self.io.say(message)
        self.io.pause()


    def _abort(self, message):
        self.io.say(message)
        self.io.pause()


    def _validate(self, schema, **data):
        """Build a schema, printing its errors and returning None when the input is rejected."""
        try:
            return schema(**data)
        except ValidationError as e:
            self.io.show_errors(e)
            self.io.pause()
            return None


    def _choose(self, title, items, label, prompt):
        """List items 1..N and return the chosen one, None when the user backs out."""
        self.io.say(f"\n===== {title} =====")
        for i, item in enumerate(items, start=1):
            self.io.say(f"{i}. {label(item)}")

        index = self.io.read_int(prompt, 1, len(items), allow_back=True)
        return None if index is None else items[index - 1]


    #------------------------------------------------------MAIN MENU-----------------------------------------------------#
    def start(self):
        self.io.say("\nWELCOME TO THE RAILWAY STATION MANAGEMENT SYSTEM")

        while True:
            self.io.say("\n===== Railway Station Management System =====")
            self.io.say("1. Login")
            self.io.say("2. Register as Customer")
            self.io.say("3. Exit")

            option = self.io.read_int("Choose an option", 1, 3)
            if option == 1:
                self.login()
            elif option == 2:
                self.register_customer()
            else:
                self.io.say("Goodbye!")
                return


    def login(self):
        username = self.io.read_string("Enter username", 1, allow_back=True)
        if username is None:
            return
        password = self.io.read_string("Enter password", 1, allow_back=True)
        if password is None:
            return

        if not self.users.login(username, password):
            self._abort("Login failed. Invalid username or password.")
            return

        self.audit.log_action("LOGIN")
        self.io.say("Login successful!")

        # route to the menu for the role
        if self.users.is_admin():
            self.admin_menu()
        else:
            self.customer_menu()


    def register_customer(self):
        #1. username, must be free
        while True:
            username = self.io.read_string("Enter username", 3, allow_back=True)
            if username is None:
                return
            if self.users.find_user(username) is None:
                break
            self.io.say("Username already exists. Please choose a different username.")

        #2. password
        while True:
            password = self.io.read_string(
                "Enter password (min 4 letters, 3 numbers, 1 special character, max 20 chars)", 8, allow_back=True)
            if password is None:
                return
            if schemas.is_valid_password(password):
                break
            self.io.say("Invalid password format. Please try again.")

        #3. full name
        full_name = self.io.read_string("Enter full name", 3, allow_back=True)
        if full_name is None:
            return

        #4. email
        while True:
            email = self.io.read_string("Enter email (format: example@domain.com)", 5, allow_back=True)
            if email is None:
                return
            if schemas.is_valid_email(email):
                break
            self.io.say("Invalid email format. Please try again.")

        try:
            self.users.register_customer(username, password, full_name, email)
        except ValidationError as e:
            self.io.show_errors(e)
            self.io.pause()
            return
        except DuplicateUserError as e:
            self._abort(str(e))
            return

        self._done("REGISTER_CUSTOMER", "Customer registration successful!")


    def logout(self):
        self.users.logout()
        self.audit.log_action("LOGOUT")
        self.io.say("Logged out successfully.")


    #------------------------------------------------------ADMIN-----------------------------------------------------#
    def admin_menu(self):
        while True:
            self.io.say("\n===== Admin Menu =====")
            self.io.say("1. Manage Stations")
            self.io.say("2. Manage Trains")
            self.io.say("3. Manage Routes")
            self.io.say("4. Manage Schedules")
            self.io.say("5. View Revenue Report")
            self.io.say("6. Clear Database")
            self.io.say("7. Logout")

            option = self.io.read_int("Choose an option", 1, 7)
            if option == 1:
                self._submenu("Station Management", [
                    ("Add New Station", self.add_station),
                    ("View All Stations", self.view_stations),
                ])
            elif option == 2:
                self._submenu("Train Management", [
                    ("Add New Train", self.add_train),
                    ("View All Trains", self.view_trains),
                ])
            elif option == 3:
                self._submenu("Route Management", [
                    ("Add New Route", self.add_route),
                    ("Update Route Price", self.update_route_price),
                    ("View All Routes", self.view_routes),
                ])
            elif option == 4:
                self._submenu("Schedule Management", [
                    ("Add New Schedule", self.add_schedule),
                    ("View All Schedules", self.view_schedules),
                    ("Find Schedules by Destination", self.find_schedules_by_destination),
                ])
            elif option == 5:
                self.view_revenue_report()
            elif option == 6:
                self.clear_database()
            else:
                self.logout()
                return


    def _submenu(self, title, entries):
        while True:
            self.io.say(f"\n===== {title} =====")
            for i, (label, _) in enumerate(entries, start=1):
                self.io.say(f"{i}. {label}")
            self.io.say(f"{len(entries) + 1}. Back to Admin Menu")

            option = self.io.read_int("Choose an option", 1, len(entries) + 1)
            if option == len(entries) + 1:
                return
            entries[option - 1][1]()


    def add_station(self):
        name = self.io.read_string("Enter station name", 2, allow_back=True)
        if name is None:
            return
        if self.network.find_station(name) is not None:
            self._abort("A station with this name already exists.")
            return

        platform_count = self.io.read_int("Enter number of platforms", 1, 20, allow_back=True)
        if platform_count is None:
            return

        data = self._validate(schemas.StationCreate, name=name, platform_count=platform_count)
        if data is None:
            return
        self.network.add_station(Station(data.name, data.platform_count))
        self._done("ADD_STATION", "Station added successfully!")


    def view_stations(self):
        stations = self.network.stations
        self.io.say("\n===== All Stations =====")
        if not stations:
            self.io.say("No stations available.")
        else:
            self.io.say(f"{'Station Name':<25} | {'Platforms':<15}")
            self.io.say("-" * 43)
            for station in stations:
                self.io.say(f"{station.name:<25} | {station.platform_count:<15d}")
        self._done("VIEW_STATIONS")


    def add_train(self):
        number = self.io.read_string("Enter train number", 2, allow_back=True)
        if number is None:
            return
        if self.network.find_train(number) is not None:
            self._abort("A train with this number already exists.")
            return

        train_type = self.io.read_string("Enter train type (e.g., InterRegio, Regio)", 2, allow_back=True)
        if train_type is None:
            return
        capacity = self.io.read_int("Enter train capacity", 1, 1000, allow_back=True)
        if capacity is None:
            return

        data = self._validate(schemas.TrainCreate, number=number, type=train_type, capacity=capacity)
        if data is None:
            return
        self.network.add_train(Train(data.number, data.type, data.capacity))
        self._done("ADD_TRAIN", "Train added successfully!")


    def view_trains(self):
        trains = self.network.trains
        self.io.say("\n===== All Trains =====")
        if not trains:
            self.io.say("No trains available.")
        else:
            self.io.say(f"{'Number':<10} | {'Type':<15} | {'Capacity':<10}")
            self.io.say("-" * 40)
            for train in trains:
                self.io.say(f"{train.number:<10} | {train.type:<15} | {train.capacity:<10d}")
        self._done("VIEW_TRAINS")


    def add_route(self):
        stations = self.network.stations
        if len(stations) < 2:
            self._abort("You need at least two stations to create a route.")
            return

        origin = self._choose("Available Stations", stations, lambda s: s.name, "Select origin station number")
        if origin is None:
            return
        destination = self.io.read_int("Select destination station number", 1, len(stations), allow_back=True)
        if destination is None:
            return
        destination = stations[destination - 1]

        if destination.name == origin.name:
            self._abort("Origin and destination cannot be the same station.")
            return
        if self.network.find_route(origin.name, destination.name) is not None:
            self._abort("A route between these stations already exists.")
            return

        base_price = self.io.read_float("Enter base price for this route (RON)", 0.01, allow_back=True)
        if base_price is None:
            return

        data = self._validate(schemas.RouteCreate, origin=origin.name, destination=destination.name,
                              base_price=base_price)
        if data is None:
            return
        self.network.add_route(Route(origin, destination, data.base_price))
        self._done("ADD_ROUTE", "Route added successfully!")


    def update_route_price(self):
        routes = self.network.routes
        if not routes:
            self._abort("No routes available to update.")
            return

        route = self._choose(
            "Routes for Price Update", routes,
            lambda r: f"{r.origin.name} -> {r.destination.name} (Current price: {r.base_price} RON)",
            "Select route number to update",
        )
        if route is None:
            return

        new_price = self.io.read_float("Enter new price for this route (RON)", 0.01, allow_back=True)
        if new_price is None:
            return

        data = self._validate(schemas.RoutePriceUpdate, base_price=new_price)
        if data is None:
            return
        self.network.update_route_price(route, data.base_price)
        self._done("UPDATE_ROUTE_PRICE", "Route price updated successfully!")


    def view_routes(self):
        routes = self.network.routes
        self.io.say("\n===== All Routes =====")
        if not routes:
            self.io.say("No routes available.")
        else:
            self.io.say(f"{'Origin':<25} | {'Destination':<25} | {'Price (RON)':<10}")
            self.io.say("-" * 64)
            for route in routes:
                self.io.say(f"{route.origin.name:<25} | {route.destination.name:<25} | {route.base_price:10.2f}")
        self._done("VIEW_ROUTES")


    def add_schedule(self):
        trains = self.network.trains
        routes = self.network.routes
        if not trains:
            self._abort("No trains available. Please add trains first.")
            return
        if not routes:
            self._abort("No routes available. Please add routes first.")
            return

        train = self._choose("Available Trains", trains, str, "Select train number")
        if train is None:
            return
        route = self._choose("Available Routes", routes,
                             lambda r: f"{r.origin.name} -> {r.destination.name}", "Select route number")
        if route is None:
            return

        departure = self.io.read_time("Enter departure time", allow_back=True)
        if departure is None:
            return
        arrival = self.io.read_time("Enter arrival time", allow_back=True)
        if arrival is None:
            return

        # the platform has to exist at the origin station
        origin = route.origin
        max_platform = origin.platform_count
        if max_platform <= 0:
            self._abort(f"Error: The origin station ({origin.name}) doesn't have any platforms available.")
            return

        self.io.say(f"\n===== Available Platforms at {origin.name} =====")
        self.io.say(f"This station has {max_platform} platform(s) numbered 1 to {max_platform}")
        platform = self.io.read_int(f"Enter platform number (1-{max_platform})", 1, max_platform, allow_back=True)
        if platform is None:
            return

        data = self._validate(schemas.ScheduleCreate, departure_time=departure, arrival_time=arrival,
                              platform_number=platform, platform_count=max_platform)
        if data is None:
            return

        self.network.add_schedule(Schedule(train, route, data.departure_time, data.arrival_time, data.platform_number))
        self._done("ADD_SCHEDULE", "Schedule added successfully!")


    def view_schedules(self):
        schedules = self.network.schedules
        self.io.say("\n===== All Schedules =====")
        if not schedules:
            self.io.say("No schedules available.")
        else:
            self.io.say(f"{'Train':<10} | {'Origin':<25} | {'Destination':<25} | "
                        f"{'Departure':<10} | {'Arrival':<10} | {'Platform':<8}")
            self.io.say("-" * 96)
            for s in schedules:
                self.io.say(f"{s.train.number:<10} | {s.route.origin.name:<25} | {s.route.destination.name:<25} | "
                            f"{s.departure_time:<10} | {s.arrival_time:<10} | {s.platform_number:<8d}")
        self._done("VIEW_SCHEDULES")


    def find_schedules_by_destination(self):
        destination = self.io.read_string("Enter destination station name", 2, allow_back=True)
        if destination is None:
            return

        schedules = self.network.find_schedules_by_destination(destination)
        self.io.say(f"\n===== Schedules to {destination} =====")
        if not schedules:
            self.io.say("No schedules available for this destination.")
        else:
            self.io.say(f"{'Train':<10} | {'From':<25} | {'Departure':<10} | {'Arrival':<10} | {'Platform':<8}")
            self.io.say("-" * 70)
            for s in schedules:
                self.io.say(f"{s.train.number:<10} | {s.route.origin.name:<25} | "
                            f"{s.departure_time:<10} | {s.arrival_time:<10} | {s.platform_number:<8d}")
        self._done("FIND_SCHEDULES_BY_DESTINATION")


    def view_revenue_report(self):
        self.io.say("\n===== Revenue Report =====")
        self.io.say(f"Total Revenue: {self.tickets.total_revenue():.2f} RON")
        self._done("VIEW_REVENUE_REPORT")


    def clear_database(self):
        self.io.say("\n===== Clear Database =====")
        self.io.say("WARNING: This will delete all data from the database!")
        if not self.io.read_yes_no("Are you sure you want to proceed?"):
            self.io.say("Database clearing aborted.")
            return

        password = self.io.read_string("Enter admin password to confirm", 1, allow_back=True)
        if password is None:
            return
        if not self.users.current_user.authenticate(password):
            self._abort("Incorrect password. Database clearing aborted.")
            return

        # admin accounts survive the reset
        self.network.clear_all()
        self.users.clear_customers()
        self._done("CLEAR_DATABASE", "Database cleared successfully!")


    #------------------------------------------------------CUSTOMER-----------------------------------------------------#
    def customer_menu(self):
        actions = {
            1: self.view_routes,
            2: self.view_schedules,
            3: self.find_schedules_by_destination,
            4: self.purchase_ticket,
            5: self.view_my_tickets,
            6: self.make_reservation,
            7: self.manage_reservations,
        }
        while True:
            self.io.say("\n===== Customer Menu =====")
            self.io.say("1. View Available Routes")
            self.io.say("2. View Schedules")
            self.io.say("3. Find Schedules by Destination")
            self.io.say("4. Purchase Ticket")
            self.io.say("5. View My Tickets")
            self.io.say("6. Make Reservation")
            self.io.say("7. Manage My Reservations")
            self.io.say("8. Logout")

            option = self.io.read_int("Choose an option", 1, 8)
            if option == 8:
                self.logout()
                return
            actions[option]()


    def _customer(self) -> Customer:
        return self.users.current_user


    def purchase_ticket(self):
        schedules = self.network.schedules
        if not schedules:
            self._abort("No schedules available for booking tickets.")
            return

        schedule = self._choose("Available Schedules", schedules, str, "Select schedule number")
        if schedule is None:
            return

        first_class = self.io.read_yes_no("Would you like first class?")
        price = ticket_price(schedule.route.base_price, first_class)
        self.io.say(f"Ticket price will be {price:.2f} RON")
        if not self.io.read_yes_no("Confirm purchase?"):
            self._abort("Ticket purchase canceled.")
            return

        ticket = self.tickets.purchase_ticket(self._customer(), schedule, first_class)
        self.io.say("Ticket purchased successfully!")
        self.io.say(f"Ticket ID: {ticket.id}")
        self._done("PURCHASE_TICKET", f"Total price: {ticket.price:.2f} RON")


    def view_my_tickets(self):
        tickets = self.tickets.tickets_for(self._customer())
        self.io.say("\n===== My Tickets =====")
        if not tickets:
            self.io.say("You don't have any tickets yet.")
        else:
            self.io.say(f"{'ID':<8} | {'From':<25} | {'To':<25} | {'Departure':<10} | "
                        f"{'Price':<10} | {'First Class':<12} | {'Train':<10}")
            self.io.say("-" * 110)
            for t in tickets:
                s = t.schedule
                self.io.say(f"{t.id:<8} | {s.route.origin.name:<25} | {s.route.destination.name:<25} | "
                            f"{s.departure_time:<10} | {t.price:10.2f} | {'Yes' if t.first_class else 'No':<12} | "
                            f"{s.train.number:<10}")
        self._done("VIEW_MY_TICKETS")


    def make_reservation(self):
        schedules = self.network.schedules
        if not schedules:
            self._abort("No schedules available for reservation.")
            return

        schedule = self._choose("Available Schedules for Reservation", schedules, str,
                                "Select schedule number for reservation")
        if schedule is None:
            return

        seat_number = self.io.read_int("Enter seat number", 1, 100, allow_back=True)
        if seat_number is None:
            return

        if self._validate(schemas.ReservationCreate, seat_number=seat_number, capacity=schedule.train.capacity) is None:
            return

        reservation = self.network.reserve_seat(self._customer(), schedule, seat_number)
        self.io.say("Reservation made successfully!")
        self.io.say(f"Reservation ID: {reservation.id}")
        self._done("MAKE_RESERVATION",
                   f"Please pay {schedule.route.base_price:.2f} RON within 24 hours to confirm your reservation.")


    def manage_reservations(self):
        reservations = self.network.reservations_for(self._customer())
        if not reservations:
            self._abort("You don't have any reservations yet.")
            return

        reservation = self._choose(
            "My Reservations", reservations,
            lambda r: f"{r.id} | {r.schedule} | Seat: {r.seat_number} | "
                      f"{'Confirmed' if r.is_confirmed() else 'Unconfirmed'}",
            "Select reservation",
        )
        if reservation is None:
            return

        if reservation.is_confirmed():
            if self.io.read_yes_no("Cancel the confirmation of this reservation?"):
                self.network.cancel_reservation(reservation.id)
                self._done("CANCEL_RESERVATION", "Reservation is no longer confirmed.")
        elif self.io.read_yes_no("Confirm this reservation?"):
            self.network.confirm_reservation(reservation.id)
            self._done("CONFIRM_RESERVATION", "Reservation confirmed!")
