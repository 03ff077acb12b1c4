"""
Tests for the Gemini transform adapter (no network).
"""

from types import SimpleNamespace

import pytest

from ..editing.transform import (
    GeminiImageTransform,
    ImageInput,
    NoImageProduced,
    TargetSize,
)


def fake_response(*parts):
    content = SimpleNamespace(parts=list(parts))
    return SimpleNamespace(candidates=[SimpleNamespace(content=content)])


class TestBuildParts:
    """Tests for request construction."""

    def test_text_only(self):
        parts = GeminiImageTransform.build_parts("a villa", None, None)
        assert len(parts) == 1
        assert parts[0].text == "a villa"

    def test_primary_only_keeps_prompt(self):
        primary = ImageInput(b"main", "image/jpeg")
        parts = GeminiImageTransform.build_parts("add a pool", primary, None)

        assert parts[0].text == "add a pool"
        assert parts[1].inline_data.data == b"main"
        assert parts[1].inline_data.mime_type == "image/jpeg"

    def test_both_images_are_labelled(self):
        primary = ImageInput(b"main", "image/jpeg")
        reference = ImageInput(b"style", "image/png")

        parts = GeminiImageTransform.build_parts("dusk", primary, reference, TargetSize.QHD_2K)

        assert len(parts) == 3
        assert "STRUCTURE REFERENCE" in parts[0].text
        assert "STYLE/ENVIRONMENT REFERENCE" in parts[0].text
        assert 'User Instruction: "dusk"' in parts[0].text
        assert parts[1].inline_data.data == b"main"
        assert parts[2].inline_data.data == b"style"


class TestExtractImage:
    """Tests for response parsing."""

    def test_returns_first_inline_image(self):
        response = fake_response(
            SimpleNamespace(inline_data=None, text="thinking"),
            SimpleNamespace(inline_data=SimpleNamespace(data=b"png-bytes")),
        )
        assert GeminiImageTransform._extract_image(response) == b"png-bytes"

    def test_text_only_response(self):
        response = fake_response(SimpleNamespace(inline_data=None, text="sorry"))
        with pytest.raises(NoImageProduced):
            GeminiImageTransform._extract_image(response)

    def test_no_candidates(self):
        with pytest.raises(NoImageProduced):
            GeminiImageTransform._extract_image(SimpleNamespace(candidates=None))
