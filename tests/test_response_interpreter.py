"""Tests for response interpretation."""

import base64
import pytest
from google.genai import types

from conftest import empty_response, image_response, text_response
from services.errors import EmptyResponseError, ModelRefusedError
from services.response_interpreter import interpret_response, refusal_excerpt


class TestImageParts:

    def test_inline_image_becomes_png_data_url(self):
        url = interpret_response(image_response(b"image-bytes"))

        assert url.startswith("data:image/png;base64,")
        assert base64.b64decode(url.split(",", 1)[1]) == b"image-bytes"

    def test_png_label_regardless_of_reported_type(self):
        url = interpret_response(image_response(b"jpeg-bytes", mime_type="image/jpeg"))

        assert url.startswith("data:image/png;base64,")

    def test_image_wins_over_text(self):
        response = types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    content=types.Content(
                        role="model",
                        parts=[
                            types.Part(text="Here is your photo"),
                            types.Part(inline_data=types.Blob(mime_type="image/png", data=b"first")),
                            types.Part(inline_data=types.Blob(mime_type="image/png", data=b"second")),
                        ],
                    )
                )
            ]
        )

        url = interpret_response(response)

        assert base64.b64decode(url.split(",", 1)[1]) == b"first"


class TestTextParts:

    def test_long_text_truncated_with_ellipsis(self):
        text = "x" * 100 + "y" * 100

        with pytest.raises(ModelRefusedError) as ei:
            interpret_response(text_response(text))

        assert text[:150] + "..." in ei.value.message
        assert ei.value.excerpt == text[:150] + "..."

    def test_short_text_not_truncated(self):
        with pytest.raises(ModelRefusedError) as ei:
            interpret_response(text_response("Safety policy prevents this request."))

        assert ei.value.excerpt == "Safety policy prevents this request."
        assert "..." not in ei.value.message

    def test_exactly_limit_not_truncated(self):
        assert refusal_excerpt("a" * 150) == "a" * 150


class TestEmpty:

    def test_no_parts(self):
        with pytest.raises(EmptyResponseError):
            interpret_response(empty_response())

    def test_no_candidates(self):
        with pytest.raises(EmptyResponseError):
            interpret_response(types.GenerateContentResponse(candidates=[]))
