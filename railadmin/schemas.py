from pydantic import BaseModel, EmailStr, Field, TypeAdapter, ValidationError, field_validator, model_validator
from datetime import datetime
import re


TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")
MAX_PASSWORD_LENGTH = 20

email_adapter = TypeAdapter(EmailStr)


def is_valid_email(email: str) -> bool:
    try:
        email_adapter.validate_python(email)
    except ValidationError:
        return False
    return True


def is_valid_password(password: str) -> bool:
    # at least 4 letters, 3 digits and 1 other character, at most 20 chars
    if password is None or len(password) > MAX_PASSWORD_LENGTH:
        return False

    letters = sum(1 for c in password if c.isalpha())
    digits = sum(1 for c in password if c.isdigit())
    others = len(password) - letters - digits

    return letters >= 4 and digits >= 3 and others >= 1


def normalize_time(value: str) -> str:
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Invalid time format. Please use HH:MM (24-hour format).")
    return datetime.strptime(value, "%H:%M").strftime("%H:%M")


#------------------------USER------------------------
class CustomerCreate(BaseModel):
    username: str = Field(min_length=3)
    password: str
    full_name: str = Field(min_length=3)
    email: EmailStr

    # stripped before the length checks run
    @field_validator("username", "full_name", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not is_valid_password(value):
            raise ValueError("Password needs at least 4 letters, 3 numbers and 1 special character (max 20 chars)")
        return value


#------------------------INFRASTRUCTURE------------------------
class StationCreate(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    platform_count: int = Field(ge=1, le=20)


class RouteCreate(BaseModel):
    origin: str
    destination: str
    base_price: float = Field(ge=0.01, allow_inf_nan=False)

    @model_validator(mode="after")
    def check_stations(self):
        if self.origin == self.destination:
            raise ValueError("Origin and destination cannot be the same station.")
        return self


class RoutePriceUpdate(BaseModel):
    base_price: float = Field(ge=0.01, allow_inf_nan=False)


#------------------------TRAIN------------------------
class TrainCreate(BaseModel):
    number: str = Field(min_length=2, max_length=20)
    type: str = Field(min_length=2, max_length=50)
    capacity: int = Field(ge=1, le=1000)


class ScheduleCreate(BaseModel):
    departure_time: str
    arrival_time: str
    platform_number: int = Field(ge=1)
    platform_count: int = Field(ge=1)     # platforms at the origin station

    @field_validator("departure_time", "arrival_time")
    @classmethod
    def check_time(cls, value: str) -> str:
        return normalize_time(value)

    @model_validator(mode="after")
    def check_schedule(self):
        # zero padded "HH:MM" strings compare like times
        if self.departure_time > self.arrival_time:
            raise ValueError("Arrival time cannot be earlier than departure time.")
        if self.platform_number > self.platform_count:
            raise ValueError(f"Platform must be between 1 and {self.platform_count}.")
        return self


#------------------------BOOKING------------------------
class ReservationCreate(BaseModel):
    seat_number: int = Field(ge=1)
    capacity: int = Field(ge=1)

    @model_validator(mode="after")
    def check_capacity(self):
        if self.seat_number > self.capacity:
            raise ValueError(f"Selected seat number exceeds train capacity ({self.capacity}).")
        return self
