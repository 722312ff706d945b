"""Unit tests for the generate flow."""

from unittest.mock import MagicMock

import pytest

from services.filename_service import FILENAME_PATTERN
from services.image_service import (
    ImageGenerationService,
    PromptRequiredError,
    validate_prompt,
)


class TestValidatePrompt:
    """Test prompt validation."""

    @pytest.mark.parametrize("prompt", [None, "", "   ", "\n\t"])
    def test_blank_prompts_rejected(self, prompt):
        with pytest.raises(PromptRequiredError, match="Prompt is required"):
            validate_prompt(prompt)

    def test_prompt_error_is_value_error(self):
        """Routers translate ValueError into a 400."""
        assert issubclass(PromptRequiredError, ValueError)

    def test_valid_prompt_unchanged(self):
        assert validate_prompt("  keep spacing ") == "  keep spacing "


class TestGenerate:
    """Test rendering and storing one image."""

    def test_writes_file(self, generation_service, images_dir):
        generated = generation_service.generate("a calm lake at dawn", "ocean")
        path = images_dir / generated.filename
        assert path.is_file()
        assert path.stat().st_size == generated.size_bytes
        assert path.read_bytes()[:4] == b"\x89PNG"

    def test_filename_matches_pattern(self, generation_service):
        generated = generation_service.generate("a calm lake at dawn", "ocean")
        match = FILENAME_PATTERN.match(generated.filename)
        assert match is not None
        assert match.group("prompt") == "a-calm-lake"

    def test_unknown_style_is_echoed(self, generation_service):
        """The requested style is reported back even when it falls back to abstract."""
        generated = generation_service.generate("neon city", "vaporwave")
        assert generated.style == "vaporwave"
        assert generated.filename.startswith("ai-vaporwave-")

    def test_none_style_means_abstract(self, generation_service):
        generated = generation_service.generate("no style", None)
        assert generated.style == "abstract"
        assert generated.filename.startswith("ai-abstract-")

    def test_blank_prompt_writes_nothing(self, generation_service, images_dir):
        with pytest.raises(PromptRequiredError):
            generation_service.generate("   ", "ocean")
        assert not images_dir.exists() or not any(images_dir.iterdir())

    def test_render_failure_skips_save(self, composer):
        """A rendering error propagates and nothing is stored."""
        storage = MagicMock()
        broken = MagicMock(wraps=composer)
        broken.render_png.side_effect = OSError("encoder failed")
        service = ImageGenerationService(broken, storage)

        with pytest.raises(OSError):
            service.generate("anything", "tech")
        storage.save_image.assert_not_called()
