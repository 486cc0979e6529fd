from sheet2anim.core import Animation, AnimationFrame, Frame, GridConfig
from sheet2anim.core import frame_renderer, image_loader
from sheet2anim.core.frame_resolver import resolve_grid_frames
from sheet2anim.core.playback import PlaybackEngine

BLUE = (0, 0, 255, 255)
RED = (255, 0, 0, 255)


def test_crop_frame_scales_without_smoothing(sheet_png):
    image = image_loader.load_image(sheet_png)
    crop = frame_renderer.crop_frame(image, Frame(1, 28, 0, 8, 8), scale=4)
    assert crop.size == (32, 32)
    assert crop.getpixel((15, 0)) == RED
    assert crop.getpixel((16, 0)) == BLUE


def test_crop_outside_image_is_transparent(sheet_png):
    image = image_loader.load_image(sheet_png)
    crop = frame_renderer.crop_frame(image, Frame(0, 48, 0, 32, 32), scale=1)
    assert crop.size == (32, 32)
    assert crop.getpixel((0, 0)) == BLUE
    assert crop.getpixel((20, 0))[3] == 0


def test_render_current_frame_follows_engine(sheet_png):
    image = image_loader.load_image(sheet_png)
    frames = resolve_grid_frames(GridConfig(rows=1, columns=2))
    engine = PlaybackEngine(Animation("Walk", (AnimationFrame(1, 100), AnimationFrame(7, 100))))
    rendered = frame_renderer.render_current_frame(image, frames, engine, scale=2)
    assert rendered.size == (64, 64)
    assert rendered.getpixel((10, 10)) == BLUE

    engine.play()
    engine.tick(100)
    assert frame_renderer.render_current_frame(image, frames, engine) is None


def test_render_overlay_keeps_sheet_size(sheet_png):
    image = image_loader.load_image(sheet_png)
    frames = resolve_grid_frames(GridConfig(rows=1, columns=2))
    overlay = frame_renderer.render_overlay(image, frames)
    assert overlay.size == image.size
    assert overlay.mode == "RGBA"
    assert overlay.getpixel((20, 20)) != RED
    assert image.getpixel((20, 20)) == RED
