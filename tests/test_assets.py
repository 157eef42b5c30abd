import pytest
from PIL import Image, ImageFont

import content.assets
from content.assets import AssetError, AssetRegistry
from content.weather_icons import CONDITIONS, describe_condition, load_icon_sequence


def _write_icons(res_dir, condition, count, size=(8, 8)):
    cond_dir = res_dir / condition
    cond_dir.mkdir(parents=True, exist_ok=True)
    for i in range(count):
        Image.new("RGBA", size, (i * 40, 0, 0, 255)).save(cond_dir / f"{i}.png")


def _write_all(res_dir):
    for condition in CONDITIONS:
        _write_icons(res_dir, condition, 1)
    _write_icons(res_dir, "rain", 6)
    Image.new("RGB", (100, 50), (1, 2, 3)).save(res_dir / "background.png")


@pytest.fixture
def fake_fonts(monkeypatch):
    monkeypatch.setattr(content.assets, "load_font", lambda path, size: ImageFont.load_default(size=size))


def test_icon_sequence_with_six_frames(tmp_path):
    _write_icons(tmp_path, "rain", 6)
    frames = load_icon_sequence(tmp_path, "rain")
    assert len(frames) == 6
    assert [f.getpixel((0, 0))[0] for f in frames] == [0, 40, 80, 120, 160, 200]
    assert all(f.mode == "RGBA" for f in frames)


def test_single_frame_icon_is_repeated(tmp_path):
    _write_icons(tmp_path, "fog", 1)
    frames = load_icon_sequence(tmp_path, "fog")
    assert len(frames) == 6
    assert all(f is frames[0] for f in frames)


def test_missing_first_frame_raises(tmp_path):
    with pytest.raises(OSError):
        load_icon_sequence(tmp_path, "snow")


def test_describe_condition():
    assert describe_condition("partly-cloudy-day") == "Partly\nCloudy"
    assert describe_condition("tornado") == "tornado"


def test_load_registry(tmp_path, fake_fonts):
    _write_all(tmp_path)
    registry = AssetRegistry.load(tmp_path)
    assert set(registry.icons) == set(CONDITIONS)
    assert set(registry.fonts) == {"small", "regular", "large"}
    assert registry.background.size == (975, 575)
    assert registry.background.mode == "RGBA"
    assert registry.resolve_icon("rain")[5].getpixel((0, 0))[0] == 200


def test_missing_font_is_fatal(tmp_path):
    _write_all(tmp_path)
    with pytest.raises(AssetError, match="Star4000"):
        AssetRegistry.load(tmp_path)


def test_missing_background_is_fatal(tmp_path, fake_fonts):
    _write_all(tmp_path)
    (tmp_path / "background.png").unlink()
    with pytest.raises(AssetError):
        AssetRegistry.load(tmp_path)


def test_broken_icon_is_fatal(tmp_path, fake_fonts):
    _write_all(tmp_path)
    (tmp_path / "snow" / "0.png").write_bytes(b"not a png")
    with pytest.raises(AssetError, match="snow"):
        AssetRegistry.load(tmp_path)


def test_resolve_icon_falls_back_to_default(assets):
    assert assets.resolve_icon("not-a-real-condition") is assets.icons["clear-day"]
    assert assets.icon_frame("not-a-real-condition", 4) is assets.icons["clear-day"][4]


def test_icon_frame_cycles_short_sequences(assets, fonts):
    short = Image.new("RGBA", (4, 4))
    registry = AssetRegistry(
        fonts=fonts,
        icons={"clear-day": (short,)},
        background=assets.background,
    )
    assert registry.icon_frame("clear-day", 5) is short


def test_missing_font_id_returns_none(assets):
    assert assets.font("huge") is None


def test_registry_requires_default_condition(assets, fonts):
    with pytest.raises(AssetError):
        AssetRegistry(fonts=fonts, icons={"rain": assets.icons["rain"]}, background=assets.background)
