"""Command-line entry point for sprite sheet animation configs."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

import pydantic

from .core import GridConfig, ParseMode, Point, ProjectState, SourceView
from .core import config_emitter, config_writer, frame_resolver, image_loader, preview
from .core.errors import InvalidImageError, ValidationError
from .core.playback import PlaybackEngine
from .core.settings import load_editor_settings
from .schemas import ProjectRequest
from .utils import validators

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def _add_project_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("image", type=Path, help="Path to the sprite sheet image")
    parser.add_argument(
        "--project",
        type=Path,
        help="JSON project description (grid or source_views, animations, group_name)",
    )
    parser.add_argument(
        "--grid",
        type=int,
        nargs=4,
        metavar=("ROWS", "COLUMNS", "WIDTH", "HEIGHT"),
        help="Tile the image into a uniform grid of sprites",
    )
    parser.add_argument("--origin", type=int, nargs=2, metavar=("X", "Y"), help="Grid origin offset (px)")
    parser.add_argument("--margin", type=int, nargs=2, metavar=("X", "Y"), help="Gap between grid cells (px)")
    parser.add_argument(
        "--view",
        type=int,
        nargs=4,
        action="append",
        metavar=("X", "Y", "WIDTH", "HEIGHT"),
        help="Add an irregular source view; repeat for each frame",
    )
    parser.add_argument(
        "--animation",
        action="append",
        metavar="SPEC",
        help="Animation as Name[=Strategy]:frame[@ms],... e.g. Walk=PingPong:0,1,2@90",
    )
    parser.add_argument("--group", help="Name of the exported animation group")
    parser.add_argument("--image-path", help="Image path written into the config (default: image file name)")
    parser.add_argument("--default-duration", type=int, help="Frame duration in ms when a step omits one")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheet2anim",
        description="Slice a sprite sheet into frames and generate Excalibur animation code.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    emit = commands.add_parser("emit", help="Generate the animation config")
    _add_project_arguments(emit)
    emit.add_argument("-o", "--output", type=Path, help="Write the config here instead of stdout")
    emit.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve frames and report the plan without emitting code",
    )

    play = commands.add_parser("preview", help="Simulate playback of one animation")
    _add_project_arguments(play)
    play.add_argument("--play", required=True, metavar="NAME", help="Animation to play")
    play.add_argument("--duration", type=float, default=2000.0, help="Milliseconds to simulate (default: 2000)")
    play.add_argument("--tick", type=float, default=16.0, help="Clock tick in milliseconds (default: 16)")
    return parser


def _load_request(path: Path | None) -> ProjectRequest:
    if path is None:
        return ProjectRequest()
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValidationError(f"Project file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Invalid project JSON: {exc}") from exc
    try:
        return ProjectRequest.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(str(exc)) from exc


def build_state(args: argparse.Namespace) -> ProjectState:
    """Combine the project file and command-line flags into one snapshot."""

    settings = load_editor_settings()
    default_duration = settings.default_duration if args.default_duration is None else args.default_duration
    validators.validate_duration(default_duration, "Default duration")

    size = image_loader.load_dimensions(args.image)
    request = _load_request(args.project)
    state = request.to_state(size, image_path=args.image.name, default_duration=default_duration)

    if args.grid and args.view:
        raise ValidationError("Use either --grid or --view, not both")
    if args.grid:
        rows, columns, width, height = args.grid
        grid = GridConfig(
            sprite_width=width,
            sprite_height=height,
            rows=rows,
            columns=columns,
            origin_offset=Point(*(args.origin or (0, 0))),
            margin=Point(*(args.margin or (0, 0))),
        )
        validators.validate_grid(grid)
        state = replace(state, parse_mode=ParseMode.GRID, grid=grid)
    elif args.origin or args.margin:
        raise ValidationError("--origin and --margin require --grid")
    if args.view:
        views = tuple(SourceView(*view) for view in args.view)
        for view in views:
            validators.validate_source_view(view)
        state = replace(state, parse_mode=ParseMode.SOURCE_VIEW, source_views=views)

    if args.animation:
        extra = tuple(validators.parse_animation_spec(spec, default_duration) for spec in args.animation)
        state = replace(state, animations=state.animations + extra)
    if args.group:
        state = replace(state, group_name=args.group)
    if args.image_path:
        state = replace(state, image_path=args.image_path)
    if state.parse_mode is None:
        raise ValidationError("Provide --grid, --view, or a project file that defines frames")
    return state


def _warn_dangling(state: ProjectState, frame_count: int) -> None:
    for anim in state.animations:
        missing = sorted({step.frame_index for step in anim.frames if not 0 <= step.frame_index < frame_count})
        if missing:
            logger.warning("%s references missing frames %s", anim.name, missing)


def run_emit(args: argparse.Namespace) -> int:
    state = build_state(args)
    frames = frame_resolver.resolve_frames(state.parse_mode, state.grid, state.source_views, state.image_size)
    if not frames:
        raise ValidationError("No frames resolved from the given geometry")
    _warn_dangling(state, len(frames))

    if args.dry_run:
        print(
            f"{len(frames)} frames ({state.parse_mode.value}) from {state.image_size.width}x{state.image_size.height} "
            f"image; {len(state.animations)} animations in {state.group_name}"
        )
        return 0
    if args.output:
        config_writer.write_config(state, args.output)
        return 0
    sys.stdout.write(config_emitter.generate_config(state))
    return 0


def run_preview(args: argparse.Namespace) -> int:
    state = build_state(args)
    frames = frame_resolver.resolve_frames(state.parse_mode, state.grid, state.source_views, state.image_size)
    matches = [anim for anim in state.animations if anim.name == args.play]
    if not matches:
        raise ValidationError(f"No animation named {args.play}")
    animation = matches[0]
    if not animation.is_playable:
        print(f"{animation.name} has no frames")
        return 0

    engine = PlaybackEngine(animation)
    try:
        steps = preview.simulate(engine, args.duration, args.tick)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    for step in steps:
        frame_index = animation.frames[step].frame_index
        found = frame_resolver.find_frame(frames, frame_index) is not None
        print(f"step {step} -> frame {frame_index}" + ("" if found else " (missing)"))
    if not engine.is_playing:
        print("playback ended")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    handlers = {"emit": run_emit, "preview": run_preview}
    try:
        return handlers[args.command](args)
    except (InvalidImageError, ValidationError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
