from __future__ import annotations

from aya.adapters.palette_mock import PaletteMock


def test_mock_palette_is_deterministic_hex() -> None:
    mock = PaletteMock(colors=3)

    first = mock.extract_palette("IMAGE")
    second = mock.extract_palette("IMAGE")

    assert first == second
    assert len(first) == 3
    assert all(color.startswith("#") and len(color) == 7 for color in first)
    assert mock.extract_calls == ["IMAGE", "IMAGE"]


def test_mock_recolor_echoes_base_image() -> None:
    mock = PaletteMock()

    assert mock.recolor("BASE", ["#000000"]) == "BASE"
    assert mock.recolor_calls == [("BASE", ("#000000",))]
