import uuid

from .pricing import ticket_price


def generate_short_id():
    return str(uuid.uuid4()).split("-")[0].upper()


# --- LAYER 1: INFRASTRUCTURE ---
class Platform:
    def __init__(self, number: int):
        self.number = number

    def __eq__(self, other):
        return isinstance(other, Platform) and other.number == self.number

    def __hash__(self):
        return hash(self.number)

    def __repr__(self):
        return f"Platform(number={self.number})"


class Station:
    """A station with platforms numbered 1..platform_count."""

    def __init__(self, name: str, platform_count: int):
        self.name = name
        self.platforms = [Platform(i) for i in range(1, platform_count + 1)]

    @property
    def platform_count(self):
        return len(self.platforms)

    def get_platform(self, number):
        for platform in self.platforms:
            if platform.number == number:
                return platform
        return None

    def __str__(self):
        return f"{self.name} ({self.platform_count} platforms)"

    def __repr__(self):
        return f"Station(name={self.name!r}, platforms={self.platform_count})"


class Route:
    """One-way connection; the return journey is a separate Route."""

    def __init__(self, origin: Station, destination: Station, base_price: float):
        self.origin = origin
        self.destination = destination
        self.base_price = base_price

    @property
    def key(self):
        return f"{self.origin.name}-{self.destination.name}"

    def __str__(self):
        return f"{self.origin.name} -> {self.destination.name} ({self.base_price:.2f} RON)"

    def __repr__(self):
        return (f"Route(origin={self.origin.name!r}, destination={self.destination.name!r}, "
                f"base_price={self.base_price})")




# --- LAYER 2: ASSETS ---
class Train:
    def __init__(self, number: str, type: str, capacity: int):
        self.number = number
        self.type = type
        self.capacity = capacity

    def __str__(self):
        return f"{self.number} ({self.type})"

    def __repr__(self):
        return f"Train(number={self.number!r}, type={self.type!r}, capacity={self.capacity})"


class Schedule:
    def __init__(self, train: Train, route: Route, departure_time: str, arrival_time: str, platform_number: int):
        self.train = train
        self.route = route
        self.departure_time = departure_time       # "HH:MM"
        self.arrival_time = arrival_time           # "HH:MM"
        self.platform_number = platform_number

    def __str__(self):
        return (f"Train: {self.train.number} | From: {self.route.origin.name} | "
                f"To: {self.route.destination.name} | Departure: {self.departure_time}")

    def __repr__(self):
        return (f"Schedule(train={self.train.number!r}, route={self.route.key!r}, "
                f"departure={self.departure_time!r}, arrival={self.arrival_time!r}, "
                f"platform={self.platform_number})")




# --- LAYER 3: ACCOUNTS ---
class User:
    """Base account. Passwords are kept and compared as plain text."""

    user_type = None

    def __init__(self, username: str, password: str):
        if type(self) is User:
            raise TypeError("User is abstract, create an Admin or a Customer")
        self.username = username
        self.password = password

    def authenticate(self, password):
        return self.password == password

    def __eq__(self, other):
        return isinstance(other, User) and other.username == self.username

    def __hash__(self):
        return hash(self.username)

    def __repr__(self):
        return f"{type(self).__name__}(username={self.username!r})"


class Admin(User):
    user_type = "ADMIN"


class Customer(User):
    user_type = "CUSTOMER"

    def __init__(self, username: str, password: str, full_name: str, email: str):
        super().__init__(username, password)
        self.full_name = full_name
        self.email = email
        self.tickets = []

    def add_ticket(self, ticket):
        self.tickets.append(ticket)

    def __repr__(self):
        return f"Customer(username={self.username!r}, full_name={self.full_name!r}, email={self.email!r})"




# --- LAYER 4: TRANSACTIONS ---
class Ticket:
    """Price is fixed at purchase from the route's base price at that moment."""

    def __init__(self, customer: Customer, schedule: Schedule, first_class: bool = False):
        self.id = generate_short_id()
        self.customer = customer
        self.schedule = schedule
        self.first_class = first_class
        self.price = ticket_price(schedule.route.base_price, first_class)

    def __repr__(self):
        return (f"Ticket(id={self.id!r}, customer={self.customer.full_name!r}, "
                f"from={self.schedule.route.origin.name!r}, to={self.schedule.route.destination.name!r}, "
                f"departure={self.schedule.departure_time!r}, price={self.price}, "
                f"first_class={self.first_class})")


class Reservation:
    """Seat hold on a schedule. New reservations start unconfirmed.

    cancel() only drops the confirmation; the reservation itself stays.
    """

    def __init__(self, customer: Customer, schedule: Schedule, seat_number: int):
        self.id = generate_short_id()
        self.customer = customer
        self.schedule = schedule
        self.seat_number = seat_number
        self.confirmed = False

    def is_confirmed(self):
        return self.confirmed

    def confirm(self):
        self.confirmed = True

    def cancel(self):
        self.confirmed = False

    def __repr__(self):
        return (f"Reservation(id={self.id!r}, customer={self.customer.full_name!r}, "
                f"schedule={self.schedule!r}, seat={self.seat_number}, confirmed={self.confirmed})")
