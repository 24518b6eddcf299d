"""Shared fixtures for the floor plan engine and API tests."""
import os

# In-memory database for everything imported below
os.environ["DATABASE_URL"] = "sqlite://"

import io

import pytest
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401  (registers the tables)
from app.database import Base
from app.services.canvas_transform import CanvasPoint
from app.services.layout_types import PlacedRoom, RoomSelection


class FakeTimer:
    def __init__(self, clock, when, callback):
        self.clock = clock
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Manual clock standing in for the event loop's call_later."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def call_later(self, delay, callback):
        timer = FakeTimer(self, self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds):
        self.now += seconds
        due = [t for t in self.pending if t.when <= self.now]
        for timer in due:
            timer.cancelled = True
            timer.callback()


def make_room(room_id, x, y, w, h, room_type="bedroom"):
    return PlacedRoom(
        id=room_id, type=room_type, label=room_type.title(),
        icon="", color="#7CB9E8", x=x, y=y, w=w, h=h,
    )


def png_bytes(width=32, height=24, fmt="PNG"):
    buf = io.BytesIO()
    Image.new("RGB", (width, height), (200, 200, 200)).save(buf, format=fmt)
    return buf.getvalue()


def pt(x, y):
    return CanvasPoint(x, y)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def selections():
    """Two bedrooms and a kitchen."""
    return [RoomSelection("bedroom", 2), RoomSelection("kitchen", 1)]


@pytest.fixture
def two_rooms():
    return [
        make_room("a", 100, 100, 100, 80),
        make_room("b", 300, 200, 120, 100, room_type="kitchen"),
    ]


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from app.database import get_db
    from app.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
