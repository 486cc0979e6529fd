import pytest

from sheet2anim.core import GridConfig, SourceView
from sheet2anim.core.source_views import add_source_view, remove_source_view, update_source_view


def test_add_uses_grid_sprite_size():
    views, index = add_source_view((), GridConfig(sprite_width=24, sprite_height=40))
    assert index == 0
    assert views == (SourceView(0, 0, 24, 40),)


def test_update_changes_only_named_fields():
    views = (SourceView(0, 0, 10, 10), SourceView(5, 5, 10, 10))
    updated = update_source_view(views, 1, x=12, height=30)
    assert updated[1] == SourceView(12, 5, 10, 30)
    assert updated[0] is views[0]
    assert views[1] == SourceView(5, 5, 10, 10)


def test_remove_shifts_later_views():
    views = (SourceView(0, 0, 10, 10), SourceView(10, 0, 10, 10), SourceView(20, 0, 10, 10))
    assert remove_source_view(views, 1) == (views[0], views[2])


def test_remove_out_of_range():
    with pytest.raises(IndexError):
        remove_source_view((), 0)


@pytest.mark.parametrize("index", [-1, 2])
def test_update_out_of_range(index):
    views = (SourceView(0, 0, 10, 10), SourceView(5, 5, 10, 10))
    with pytest.raises(IndexError):
        update_source_view(views, index, x=1)
