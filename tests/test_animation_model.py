import dataclasses

import pytest

from sheet2anim.core import AnimationFrame, LoopStrategy
from sheet2anim.core.animation_model import AnimationModel, renumber_selection


def test_create_names_sequentially_and_selects():
    model = AnimationModel()
    assert model.create() == 0
    assert model.create() == 1
    assert [a.name for a in model.animations] == ["Animation1", "Animation2"]
    assert model.selected == 1
    assert model.selected_animation.loop_strategy is LoopStrategy.LOOP
    assert model.selected_animation.frames == ()


def test_append_frame_uses_default_duration():
    model = AnimationModel(default_duration=120)
    model.create()
    model.append_frame(0, 3)
    model.append_frame(0, 7, duration=40)
    assert model.get(0).frames == (AnimationFrame(3, 120), AnimationFrame(7, 40))


def test_append_frame_accepts_unresolved_index():
    model = AnimationModel()
    model.create()
    model.append_frame(0, 99)
    assert model.get(0).frames[0].frame_index == 99


def test_remove_and_update_frames():
    model = AnimationModel()
    model.create()
    for idx in (0, 1, 2):
        model.append_frame(0, idx)
    model.remove_frame(0, 1)
    assert [f.frame_index for f in model.get(0).frames] == [0, 2]
    model.update_duration(0, 1, 500)
    assert model.get(0).frames[1].duration == 500


def test_rename_and_strategy():
    model = AnimationModel()
    model.create()
    model.rename(0, "Run")
    model.set_loop_strategy(0, "PingPong")
    animation = model.get(0)
    assert animation.name == "Run"
    assert animation.loop_strategy is LoopStrategy.PING_PONG


def test_edits_replace_records():
    model = AnimationModel()
    model.create()
    before = model.animations
    first = model.get(0)
    model.append_frame(0, 1)
    assert before[0] is first
    assert first.frames == ()
    assert model.animations is not before
    with pytest.raises(dataclasses.FrozenInstanceError):
        first.name = "Other"


def test_delete_renumbers_selection():
    model = AnimationModel()
    for _ in range(3):
        model.create()
    model.select(2)
    model.delete(0)
    assert model.selected == 1
    assert [a.name for a in model.animations] == ["Animation2", "Animation3"]
    model.delete(1)
    assert model.selected is None


def test_delete_after_selection_keeps_it():
    model = AnimationModel()
    model.create()
    model.create()
    model.select(0)
    model.delete(1)
    assert model.selected == 0


def test_renumber_selection():
    assert renumber_selection(None, 0) is None
    assert renumber_selection(2, 2) is None
    assert renumber_selection(3, 1) == 2
    assert renumber_selection(0, 1) == 0


@pytest.mark.parametrize(
    "action",
    [
        lambda m: m.get(5),
        lambda m: m.select(-1),
        lambda m: m.delete(3),
        lambda m: m.rename(-1, "X"),
        lambda m: m.append_frame(2, 0),
        lambda m: m.remove_frame(0, 4),
        lambda m: m.update_duration(0, 0, 10),
    ],
)
def test_out_of_range_positions_raise(action):
    model = AnimationModel()
    model.create()
    with pytest.raises(IndexError):
        action(model)


def test_select_none_clears_selection():
    model = AnimationModel()
    model.create()
    model.select(None)
    assert model.selected_animation is None
    assert len(model) == 1
