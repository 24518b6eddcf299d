"""Tests for app/services/floor_plan_store.py."""
import pytest

from app import models
from app.exceptions import InvalidLayoutError
from app.services import floor_plan_store
from app.services.layout_generator import generate_layout
from app.services.layout_notifier import LayoutChangeNotifier
from app.services.layout_types import RoomSelection


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def project(db, selections):
    project = models.Project(name="Beach house")
    db.add(project)
    db.flush()
    floor_plan_store.replace_project_rooms(db, project, selections)
    db.commit()
    db.refresh(project)
    return project


def test_rooms_stored_with_catalog_area(project):
    rooms = [(room.room_type, room.quantity, room.area_m2) for room in project.rooms]
    assert rooms == [("bedroom", 2, 12), ("kitchen", 1, 10)]
    assert floor_plan_store.project_selections(project) == [
        RoomSelection("bedroom", 2), RoomSelection("kitchen", 1)
    ]


def test_nothing_stored_yet(project):
    assert floor_plan_store.load_floor_plan(project) == ([], None)


def test_save_and_load_round_trip(db, project, selections):
    layout = generate_layout(selections)
    floor_plan_store.save_floor_plan(db, project, layout, "data:image/png;base64,AAAA")

    loaded, image_url = floor_plan_store.load_floor_plan(project)
    assert loaded == layout
    assert image_url == "data:image/png;base64,AAAA"


def test_save_rederives_rooms_from_layout(db, project):
    layout = generate_layout([RoomSelection("office", 3)])
    floor_plan_store.save_floor_plan(db, project, layout)
    assert floor_plan_store.project_selections(project) == [RoomSelection("office", 3)]


def test_image_url_kept_unless_given(db, project, selections):
    layout = generate_layout(selections)
    floor_plan_store.save_floor_plan(db, project, layout, "https://example.com/plan.png")
    floor_plan_store.save_floor_plan(db, project, layout)
    assert project.floor_plan_image_url == "https://example.com/plan.png"

    floor_plan_store.save_floor_plan(db, project, layout, "")
    assert project.floor_plan_image_url is None


def test_corrupt_layout_raises(db, project):
    project.floor_plan_layout = "{not json"
    db.commit()
    with pytest.raises(InvalidLayoutError):
        floor_plan_store.load_floor_plan(project)


def test_notifier_sink_persists(session_factory, project, selections, scheduler):
    sink = floor_plan_store.make_layout_sink(session_factory, project.id)
    notifier = LayoutChangeNotifier(sink, scheduler)
    layout = generate_layout(selections)

    notifier.notify(layout)
    notifier.close()

    db = session_factory()
    try:
        stored = floor_plan_store.get_project(db, project.id)
        assert floor_plan_store.load_floor_plan(stored)[0] == layout
    finally:
        db.close()


def test_sink_for_missing_project_is_quiet(session_factory, selections):
    sink = floor_plan_store.make_layout_sink(session_factory, 9999)
    sink(generate_layout(selections))


def test_empty_save_is_kept_and_clears_rooms(db, project):
    assert not floor_plan_store.has_stored_layout(project)

    floor_plan_store.save_floor_plan(db, project, [])

    assert floor_plan_store.has_stored_layout(project)
    assert floor_plan_store.load_floor_plan(project) == ([], None)
    assert floor_plan_store.project_selections(project) == []
