from pathlib import Path

import pytest

from sheet2anim.core import AnimationFrame, GridConfig, LoopStrategy, Point, SourceView
from sheet2anim.core.errors import InvalidImageError, ValidationError
from sheet2anim.utils import validators


def test_validate_image_path(sheet_png, tmp_path):
    assert validators.validate_image_path(sheet_png) == sheet_png
    with pytest.raises(InvalidImageError, match="File not found"):
        validators.validate_image_path(tmp_path / "missing.png")
    notes = tmp_path / "notes.txt"
    notes.write_text("hi")
    with pytest.raises(InvalidImageError, match="Unsupported format"):
        validators.validate_image_path(notes)


def test_parse_optional_int():
    assert validators.parse_optional_int(None, "Scale") is None
    assert validators.parse_optional_int("", "Scale") is None
    assert validators.parse_optional_int(" 8 ", "Scale") == 8
    with pytest.raises(ValidationError):
        validators.parse_optional_int("0", "Scale")
    with pytest.raises(ValidationError):
        validators.parse_optional_int("abc", "Scale")


def test_parse_point():
    assert validators.parse_point("3, -4", "Offset") == Point(3, -4)
    assert validators.parse_point("", "Offset") == Point()
    with pytest.raises(ValidationError):
        validators.parse_point("1,2,3", "Offset")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("pingpong", LoopStrategy.PING_PONG),
        ("Ping-Pong", LoopStrategy.PING_PONG),
        ("FREEZE", LoopStrategy.FREEZE),
        ("end", LoopStrategy.END),
        (None, LoopStrategy.LOOP),
    ],
)
def test_parse_loop_strategy(value, expected):
    assert validators.parse_loop_strategy(value) is expected


def test_parse_loop_strategy_rejects_unknown():
    with pytest.raises(ValidationError, match="Freeze"):
        validators.parse_loop_strategy("bounce")


def test_validate_grid_and_source_view():
    validators.validate_grid(GridConfig())
    with pytest.raises(ValidationError):
        validators.validate_grid(GridConfig(rows=0))
    with pytest.raises(ValidationError):
        validators.validate_grid(GridConfig(sprite_height=-1))
    validators.validate_source_view(SourceView(0, 0, 6, 6))
    with pytest.raises(ValidationError):
        validators.validate_source_view(SourceView(0, 0, 5, 40))


def test_parse_animation_spec():
    anim = validators.parse_animation_spec("Walk=PingPong:0@120, 1, 2@90", 150)
    assert anim.name == "Walk"
    assert anim.loop_strategy is LoopStrategy.PING_PONG
    assert anim.frames == (AnimationFrame(0, 120), AnimationFrame(1, 150), AnimationFrame(2, 90))


def test_parse_animation_spec_allows_empty_frames():
    anim = validators.parse_animation_spec("Idle:", 150)
    assert anim.frames == ()
    assert anim.loop_strategy is LoopStrategy.LOOP


@pytest.mark.parametrize("spec", ["Walk", ":0,1", "Walk:a,b", "Walk:0@0"])
def test_parse_animation_spec_errors(spec):
    with pytest.raises(ValidationError):
        validators.parse_animation_spec(spec, 150)
