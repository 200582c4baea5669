"""Shared fixtures: an in-memory SQLite store and scripted console input."""

import pytest
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

from railadmin import database
from railadmin.entities import Customer, Route, Schedule, Station, Train
from railadmin.prompts import Prompter
from railadmin.services import AuditService


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def engine():
    # StaticPool keeps the single in-memory database alive across connections
    engine = database.make_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    database.init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = database.make_session_factory(engine)()
    yield session
    session.close()


class ScriptedPrompter(Prompter):
    """Prompter fed from a list of answers; running out raises EOFError."""

    def __init__(self, answers: list[str]) -> None:
        self.answers = list(answers)
        self.lines: list[str] = []
        super().__init__(input_fn=self._next_answer, output_fn=self.lines.append)

    def _next_answer(self, prompt: str = "") -> str:
        if not self.answers:
            raise EOFError("script exhausted")
        return self.answers.pop(0)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def scripted():
    return ScriptedPrompter


@pytest.fixture
def audit(tmp_path):
    service = AuditService(str(tmp_path / "audit.csv"))
    yield service
    service.close()


@pytest.fixture
def central() -> Station:
    return Station("Central", 3)


@pytest.fixture
def north() -> Station:
    return Station("North", 2)


@pytest.fixture
def route(central: Station, north: Station) -> Route:
    return Route(central, north, 100.0)


@pytest.fixture
def train() -> Train:
    return Train("IR1582", "InterRegio", 120)


@pytest.fixture
def schedule(train: Train, route: Route) -> Schedule:
    return Schedule(train, route, "08:00", "10:30", 1)


@pytest.fixture
def customer() -> Customer:
    return Customer("maria", "abcd123!", "Maria Pop", "maria@railmail.ro")
