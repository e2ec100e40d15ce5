"""Tests for the immutable studio state transitions."""

import dataclasses
import pytest
from datetime import datetime, timezone

from services.models import GeneratedImage, ImageRole, SourceImage
from services.studio_state import (
    ClearImage,
    GenerateAborted,
    GenerateFailed,
    GenerateSucceeded,
    SetBackground,
    SetPose,
    StartGenerate,
    StudioState,
    StudioStore,
    UploadImage,
    reduce,
)


@pytest.fixture
def garment():
    return SourceImage(data=b"garment", content_type="image/png")


@pytest.fixture
def model():
    return SourceImage(data=b"model", content_type="image/jpeg")


@pytest.fixture
def result():
    return GeneratedImage(image_url="data:image/png;base64,AAAA", timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc))


class TestReduce:

    def test_state_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            StudioState().pose = "x"

    def test_upload_sets_role_and_clears_error(self, garment):
        state = StudioState(error="old error")

        new_state = reduce(state, UploadImage(ImageRole.garment, garment))

        assert new_state.garment is garment
        assert new_state.model is None
        assert new_state.error is None
        assert state.garment is None

    def test_clear_image(self, garment, model):
        state = StudioState(garment=garment, model=model)

        new_state = reduce(state, ClearImage(ImageRole.model))

        assert new_state.garment is garment
        assert new_state.model is None

    def test_directions(self):
        state = reduce(reduce(StudioState(), SetPose("arms crossed")), SetBackground("beach"))

        assert (state.pose, state.background) == ("arms crossed", "beach")

    def test_start_keeps_previous_result(self, result):
        state = reduce(StudioState(result=result, error="boom"), StartGenerate())

        assert state.is_generating
        assert state.result is result
        assert state.error is None

    def test_success_replaces_result(self, result):
        state = reduce(StudioState(is_generating=True), GenerateSucceeded(result))

        assert not state.is_generating
        assert state.result is result

    def test_failure_records_message(self, result):
        state = reduce(StudioState(is_generating=True, result=result), GenerateFailed("bad image"))

        assert not state.is_generating
        assert state.error == "bad image"
        assert state.result is result

    def test_abort_leaves_no_error(self):
        state = reduce(StudioState(is_generating=True), GenerateAborted())

        assert not state.is_generating
        assert state.error is None

    def test_unknown_event(self):
        with pytest.raises(TypeError):
            reduce(StudioState(), object())


class TestStudioStore:

    def test_dispatch_advances_state(self, garment):
        store = StudioStore()
        before = store.state

        after = store.dispatch(UploadImage(ImageRole.garment, garment))

        assert store.state is after
        assert before.garment is None
        assert after.garment is garment
