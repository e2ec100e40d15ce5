"""Tests for the fashion shot instruction template."""

import pytest

from services.prompt_composer import DEFAULT_BACKGROUND, DEFAULT_POSE, compose


class TestCompose:

    def test_defaults_for_empty_directions(self):
        prompt = compose("", "")

        assert DEFAULT_POSE in prompt
        assert DEFAULT_BACKGROUND in prompt

    def test_is_deterministic(self):
        assert compose("", "") == compose("", "")

    @pytest.mark.parametrize("blank", ["   ", "\n\t", None])
    def test_blank_directions_use_defaults(self, blank):
        assert compose(blank, blank) == compose("", "")

    def test_user_directions_verbatim(self):
        pose = "One foot forward, shoulders slightly back, smiling at the camera"
        background = "  Minimalist concrete wall at sunset {with soft shadows}  "

        prompt = compose(pose, background)

        assert pose in prompt
        assert background in prompt
        assert DEFAULT_POSE not in prompt
        assert DEFAULT_BACKGROUND not in prompt

    def test_only_blank_field_defaults(self):
        prompt = compose("Walking towards the camera", "")

        assert "Walking towards the camera" in prompt
        assert DEFAULT_BACKGROUND in prompt

    def test_references_image_order(self):
        prompt = compose("", "")

        assert prompt.index("Garment Photo: (first image)") < prompt.index("Model Photo: (second image)")

    def test_carries_all_directives(self):
        prompt = compose("", "").lower()

        assert "garment fitting" in prompt
        assert "anatomically correct" in prompt
        assert "light direction" in prompt
        assert "a single image" in prompt
