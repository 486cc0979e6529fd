import pydantic
import pytest

from sheet2anim.core import AnimationFrame, ImageDimensions, LoopStrategy, ParseMode, Point, SourceView
from sheet2anim.schemas import AnimationRequest, GridRequest, ProjectRequest


def test_grid_request_parses_points():
    req = GridRequest.model_validate(
        {"sprite_width": 16, "sprite_height": 16, "rows": 2, "columns": 4, "origin_offset": "2,3", "margin": {"x": 1}}
    )
    grid = req.to_config()
    assert grid.origin_offset == Point(2, 3)
    assert grid.margin == Point(1, 0)
    assert grid.columns == 4


def test_grid_request_rejects_zero_rows():
    with pytest.raises(pydantic.ValidationError):
        GridRequest.model_validate({"rows": 0})


def test_animation_request_expands_bare_indices():
    req = AnimationRequest.model_validate(
        {"name": "Walk", "frames": [0, {"frame_index": 1, "duration": 40}], "loop_strategy": "ping-pong"}
    )
    anim = req.to_animation(default_duration=90)
    assert anim.loop_strategy is LoopStrategy.PING_PONG
    assert anim.frames == (AnimationFrame(0, 90), AnimationFrame(1, 40))


def test_animation_request_rejects_bad_values():
    with pytest.raises(pydantic.ValidationError):
        AnimationRequest.model_validate({"name": "", "frames": []})
    with pytest.raises(pydantic.ValidationError):
        AnimationRequest.model_validate({"name": "Walk", "loop_strategy": "bounce"})
    with pytest.raises(pydantic.ValidationError):
        AnimationRequest.model_validate({"name": "Walk", "frames": [{"frame_index": 0, "duration": 0}]})


def test_project_request_infers_mode():
    grid = ProjectRequest.model_validate({"grid": {"rows": 2}})
    assert grid.parse_mode is ParseMode.GRID
    views = ProjectRequest.model_validate({"source_views": [{"x": 1, "y": 2, "width": 10, "height": 10}]})
    assert views.parse_mode is ParseMode.SOURCE_VIEW
    assert ProjectRequest().parse_mode is None


def test_project_request_mode_aliases():
    req = ProjectRequest.model_validate({"parse_mode": "source_view"})
    assert req.parse_mode is ParseMode.SOURCE_VIEW
    with pytest.raises(pydantic.ValidationError):
        ProjectRequest.model_validate({"parse_mode": "diagonal"})


def test_project_request_to_state():
    req = ProjectRequest.model_validate(
        {
            "source_views": [{"x": 0, "y": 0, "width": 8, "height": 8}],
            "animations": [{"name": "Blink", "frames": [0, 0]}],
            "group_name": "Eyes",
        }
    )
    state = req.to_state(ImageDimensions(32, 32), image_path="eyes.png", default_duration=75)
    assert state.image_path == "eyes.png"
    assert state.source_views == (SourceView(0, 0, 8, 8),)
    assert state.animations[0].frames == (AnimationFrame(0, 75), AnimationFrame(0, 75))
    assert state.group_name == "Eyes"


def test_source_view_request_rejects_slivers():
    with pytest.raises(pydantic.ValidationError):
        ProjectRequest.model_validate({"source_views": [{"x": 0, "y": 0, "width": 5, "height": 20}]})
