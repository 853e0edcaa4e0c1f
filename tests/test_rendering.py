"""Tests for display rendering and the keypad layout."""

import numpy as np
import pytest
from PIL import Image
from chipvm import KEY_MAP, create_color_scheme, display_to_rgb, display_to_text, key_for
from chipvm.rendering import save_screenshot


@pytest.fixture
def lit_display(fresh_state):
    display = fresh_state.display.at[0, 0].set(True).at[31, 63].set(True)
    return display


class TestDisplayToRgb:

    def test_shape_and_colors(self, lit_display):
        rgb = display_to_rgb(lit_display, scale=1)

        assert rgb.shape == (32, 64, 3)
        assert rgb.dtype == np.uint8
        assert tuple(rgb[0, 0]) == (0, 255, 0)
        assert tuple(rgb[0, 1]) == (0, 0, 0)
        assert tuple(rgb[31, 63]) == (0, 255, 0)

    def test_upscaling(self, lit_display):
        rgb = display_to_rgb(lit_display, scale=4, on_color=(255, 255, 255))

        assert rgb.shape == (128, 256, 3)
        assert (rgb[:4, :4] == 255).all()
        assert (rgb[4:8, 4:8] == 0).all()


class TestColorSchemes:

    @pytest.mark.parametrize("scheme", ["classic", "amber", "white", "blue", "retro"])
    def test_known_schemes(self, scheme):
        on_color, off_color = create_color_scheme(scheme)
        assert len(on_color) == 3
        assert len(off_color) == 3

    def test_unknown_scheme(self):
        with pytest.raises(ValueError):
            create_color_scheme("plaid")


class TestTextAndImages:

    def test_display_to_text(self, lit_display):
        lines = display_to_text(lit_display, on="#", off=".").split("\n")

        assert len(lines) == 32
        assert all(len(line) == 64 for line in lines)
        assert lines[0].startswith("#.")
        assert lines[31].endswith(".#")

    def test_save_screenshot(self, lit_display, tmp_path):
        path = tmp_path / "screen.png"

        save_screenshot(lit_display, path, scale=2, color_scheme="amber")

        with Image.open(path) as image:
            assert image.size == (128, 64)
            assert image.getpixel((0, 0)) == (255, 176, 0)


class TestKeypad:

    def test_layout(self):
        assert key_for("1") == 0x1
        assert key_for("4") == 0xC
        assert key_for("x") == 0x0
        assert key_for("v") == 0xF

    def test_uppercase(self):
        assert key_for("Q") == 0x4

    def test_unmapped(self):
        assert key_for("p") is None

    def test_covers_every_key(self):
        assert sorted(KEY_MAP.values()) == list(range(16))
