"""Tests for app/services/rect_capture.py (free draw and photo trace)."""
import pytest

from app.exceptions import CaptureStateError, InvalidImageError, UnknownRoomTypeError
from app.services.background_image import BackgroundImage, NOT_AN_IMAGE_MESSAGE
from app.services.geometry import Rect
from app.services.layout_types import RoomSelection
from app.services.rect_capture import CaptureStep, PhotoTraceWorkflow, RectCaptureWorkflow
from conftest import png_bytes, pt


def draw(workflow, start, end):
    workflow.pointer_down(pt(*start))
    workflow.pointer_move(pt(*end))
    return workflow.pointer_up()


@pytest.fixture
def workflow():
    return RectCaptureWorkflow(800, 600)


@pytest.fixture
def three_drafts(workflow):
    draw(workflow, (20, 20), (220, 170))
    draw(workflow, (300, 20), (450, 170))
    draw(workflow, (20, 300), (180, 420))
    return workflow


# --- drawing ---

def test_starts_in_draw_step(workflow):
    assert workflow.step == CaptureStep.DRAW
    assert workflow.background_image is None


def test_draw_in_any_direction_is_normalised(workflow):
    assert workflow.pointer_down(pt(250, 220)) == "draw"
    assert workflow.pointer_move(pt(100, 100)) == Rect(100, 100, 150, 120)
    assert workflow.current_rect == Rect(100, 100, 150, 120)
    draft = workflow.pointer_up()
    assert (draft.x, draft.y, draft.w, draft.h) == (100, 100, 150, 120)
    assert draft.label == "Room 1"
    assert draft.type is None
    assert workflow.selected_id == draft.id


def test_draft_is_snapped_and_min_sized(workflow):
    draft = draw(workflow, (103, 107), (128, 131))
    assert (draft.x, draft.y, draft.w, draft.h) == (100, 110, 40, 40)


@pytest.mark.parametrize("end", [(115, 300), (300, 110), (120, 120), (105, 105)])
def test_small_draws_are_discarded(workflow, end):
    assert draw(workflow, (100, 100), end) is None
    assert workflow.rooms == []
    assert not workflow.is_drawing


def test_pointer_up_without_move_discards(workflow):
    workflow.pointer_down(pt(100, 100))
    assert workflow.pointer_up() is None
    assert workflow.rooms == []


def test_draft_ids_are_unique(three_drafts):
    ids = [room.id for room in three_drafts.rooms]
    assert len(set(ids)) == 3
    assert [room.label for room in three_drafts.rooms] == ["Room 1", "Room 2", "Room 3"]


def test_pointer_down_on_draft_moves_it(three_drafts):
    first = three_drafts.rooms[0]
    assert three_drafts.pointer_down(pt(100, 100)) == "move"
    three_drafts.pointer_move(pt(140, 120))
    assert three_drafts.pointer_up() is None
    assert (first.x, first.y) == (60, 40)
    assert len(three_drafts.rooms) == 3


def test_delete_and_clear(three_drafts):
    room_id = three_drafts.rooms[1].id
    assert three_drafts.delete_room(room_id)
    assert not three_drafts.delete_room(room_id)
    assert len(three_drafts.rooms) == 2

    three_drafts.clear()
    assert three_drafts.rooms == []
    assert three_drafts.selected_id is None


# --- labelling ---

def test_start_labeling_needs_a_room(workflow):
    with pytest.raises(CaptureStateError):
        workflow.start_labeling()


def test_assign_type_only_in_label_step(three_drafts):
    with pytest.raises(CaptureStateError):
        three_drafts.assign_type(three_drafts.rooms[0].id, "bedroom")


def test_pointer_input_ignored_while_labelling(three_drafts):
    three_drafts.start_labeling()
    assert three_drafts.pointer_down(pt(600, 500)) is None
    assert three_drafts.pointer_up() is None


def test_assign_type_sets_catalog_label(three_drafts):
    three_drafts.start_labeling()
    room = three_drafts.assign_type(three_drafts.rooms[0].id, "kitchen")
    assert room.type == "kitchen"
    assert room.label == "Kitchen"


def test_assign_unknown_type_raises(three_drafts):
    three_drafts.start_labeling()
    with pytest.raises(UnknownRoomTypeError):
        three_drafts.assign_type(three_drafts.rooms[0].id, "moat")


def test_finish_blocked_until_every_room_labelled(three_drafts):
    three_drafts.start_labeling()
    rooms = three_drafts.rooms
    three_drafts.assign_type(rooms[0].id, "bedroom")
    three_drafts.assign_type(rooms[1].id, "bedroom")

    assert three_drafts.unlabeled_count() == 1
    assert three_drafts.remaining_message() == "1 room(s) remaining"
    assert not three_drafts.can_finish()
    assert three_drafts.finish() is None
    assert three_drafts.step == CaptureStep.LABEL


def test_finish_groups_by_type(three_drafts):
    three_drafts.start_labeling()
    rooms = three_drafts.rooms
    three_drafts.assign_type(rooms[0].id, "bedroom")
    three_drafts.assign_type(rooms[1].id, "kitchen")
    three_drafts.assign_type(rooms[2].id, "bedroom")

    result = three_drafts.finish()

    assert result.selections == [RoomSelection("bedroom", 2), RoomSelection("kitchen", 1)]
    assert [room.id for room in result.layout] == ["bedroom-0", "kitchen-1", "bedroom-2"]
    assert [(r.x, r.y, r.w, r.h) for r in result.layout] == [
        (r.x, r.y, r.w, r.h) for r in rooms
    ]
    assert result.layout[1].color == "#FF8C42"
    assert result.background_image is None


def test_back_to_drawing_keeps_labels(three_drafts):
    three_drafts.start_labeling()
    three_drafts.assign_type(three_drafts.rooms[0].id, "office")
    three_drafts.back_to_drawing()
    assert three_drafts.step == CaptureStep.DRAW
    assert three_drafts.rooms[0].type == "office"


# --- photo trace ---

def test_photo_trace_starts_with_upload():
    workflow = PhotoTraceWorkflow(800, 600)
    assert workflow.step == CaptureStep.UPLOAD
    assert workflow.pointer_down(pt(100, 100)) is None
    assert workflow.pointer_up() is None
    assert workflow.rooms == []


def test_photo_trace_rejects_non_image():
    workflow = PhotoTraceWorkflow(800, 600)
    with pytest.raises(InvalidImageError, match=r"Please upload an image"):
        workflow.upload_image(b"%PDF-1.4", "application/pdf")
    assert workflow.step == CaptureStep.UPLOAD
    assert workflow.background_image is None


def test_photo_trace_rejects_attached_non_image():
    workflow = PhotoTraceWorkflow(800, 600)
    with pytest.raises(InvalidImageError) as excinfo:
        workflow.attach_image(BackgroundImage("https://example.com/plan.pdf", "application/pdf"))
    assert str(excinfo.value) == NOT_AN_IMAGE_MESSAGE
    assert workflow.step == CaptureStep.UPLOAD


def test_photo_trace_full_flow():
    workflow = PhotoTraceWorkflow(800, 600)
    image = workflow.upload_image(png_bytes(64, 48), "image/png")
    assert workflow.step == CaptureStep.DRAW
    assert (image.width, image.height) == (64, 48)

    draw(workflow, (40, 40), (240, 200))
    workflow.start_labeling()
    workflow.assign_type(workflow.rooms[0].id, "living_room")
    result = workflow.finish()

    assert result.background_image is image
    assert result.selections == [RoomSelection("living_room", 1)]
    assert result.layout[0].label == "Living Room"


def test_photo_trace_image_locked_while_labelling():
    workflow = PhotoTraceWorkflow(800, 600)
    workflow.attach_image(BackgroundImage("https://example.com/plan.png", "image/png"))
    draw(workflow, (40, 40), (240, 200))
    workflow.start_labeling()
    with pytest.raises(CaptureStateError):
        workflow.attach_image(BackgroundImage("https://example.com/other.png", "image/png"))


def test_default_labels_never_repeat_after_delete(three_drafts):
    three_drafts.delete_room(three_drafts.rooms[0].id)
    draft = draw(three_drafts, (400, 300), (550, 450))
    assert draft.label == "Room 4"
    assert [room.label for room in three_drafts.rooms] == ["Room 2", "Room 3", "Room 4"]


def test_clear_restarts_numbering(three_drafts):
    three_drafts.clear()
    assert draw(three_drafts, (400, 300), (550, 450)).label == "Room 1"
