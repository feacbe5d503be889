"""Command-line interface for archflow.

Resolves diagram documents and prints geometry or frame state as JSON.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
from typing import Any

from pydantic import ValidationError
from rich.console import Console

from archflow.core.config.loader import load_app_config, load_diagram_config
from archflow.core.config.models import AppConfig, LoggingConfig
from archflow.core.layout import LayoutReferenceError, ResolvedLayout
from archflow.core.models import DiagramConfig
from archflow.core.scene import DiagramScene
from archflow.core.timeline import calculate_total_duration
from archflow.core.utils.json import dumps_json
from archflow.core.utils.logging import configure_logging, get_logger

console = Console()
err_console = Console(stderr=True)


def layout_payload(layout: ResolvedLayout) -> dict[str, Any]:
    """JSON-ready geometry keyed by element id (specs omitted)."""
    return {
        "containerWidth": layout.container_width,
        "containerHeight": layout.container_height,
        "gridTop": layout.grid_top,
        "gridBottom": layout.grid_bottom,
        "cellWidth": layout.cell_width,
        "cellHeight": layout.cell_height,
        "nodes": {
            node_id: {
                "center": node.center.model_dump(),
                "width": node.width,
                "height": node.height,
                "isInner": node.is_inner,
            }
            for node_id, node in layout.nodes.items()
        },
        "containers": {
            container_id: {
                "left": c.left,
                "top": c.top,
                "width": c.width,
                "height": c.height,
                "innerGrid": c.inner_grid.model_dump(),
            }
            for container_id, c in layout.containers.items()
        },
        "connections": [
            {
                "id": conn.id,
                "fromEdge": conn.from_edge.value,
                "toEdge": conn.to_edge.value,
                "points": [p.model_dump() for p in conn.points],
                "label": conn.label,
                "labelPosition": conn.label_position.model_dump() if conn.label_position else None,
            }
            for conn in layout.connections
        ],
    }


def _resolve_fps(args: argparse.Namespace, app_config: AppConfig) -> float:
    return args.fps if args.fps is not None else app_config.render.fps


def _emit(payload: Any, out: str | None) -> None:
    text = dumps_json(payload)
    if out:
        Path(out).write_text(text + "\n", encoding="utf-8")
        err_console.print(f"[green]Wrote[/green] {out}")
    else:
        console.print_json(text)


def _load(args: argparse.Namespace) -> DiagramConfig:
    config = load_diagram_config(args.config)
    log = get_logger(__name__, diagram=Path(args.config).name)
    log.info(
        "Loaded %d nodes, %d connections, %d timeline phases",
        len(config.nodes),
        len(config.connections),
        len(config.timeline),
    )
    return config


def cmd_layout(args: argparse.Namespace, app_config: AppConfig) -> int:
    config = _load(args)
    scene = DiagramScene(config, _resolve_fps(args, app_config), app_config.render.spacing)
    _emit(layout_payload(scene.layout), args.out)
    return 0


def cmd_frame(args: argparse.Namespace, app_config: AppConfig) -> int:
    config = _load(args)
    fps = _resolve_fps(args, app_config)
    scene = DiagramScene(config, fps, app_config.render.spacing)
    frame = args.frame if args.time is None else args.time * fps
    _emit(scene.frame(frame).model_dump(mode="json"), args.out)
    return 0


def cmd_duration(args: argparse.Namespace, app_config: AppConfig) -> int:
    config = _load(args)
    fps = _resolve_fps(args, app_config)
    frames = calculate_total_duration(config.timeline, fps)
    _emit({"frames": frames, "seconds": frames / fps, "fps": fps}, args.out)
    return 0


_COMMANDS = {
    "layout": cmd_layout,
    "frame": cmd_frame,
    "duration": cmd_duration,
}


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="archflow",
        description="archflow - animated architecture diagram engine",
    )
    p.add_argument(
        "--app-config",
        default=None,
        help="Path to app config JSON/YAML (default: archflow.json if present)",
    )
    p.add_argument("--log-level", default=None, help="Override logging level (e.g. DEBUG)")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(cmd: argparse.ArgumentParser) -> None:
        cmd.add_argument("config", help="Path to diagram document (.json, .yaml, .yml)")
        cmd.add_argument("--fps", type=float, default=None, help="Frames per second")
        cmd.add_argument("--out", default=None, help="Write JSON here instead of stdout")

    layout = sub.add_parser("layout", help="Print resolved geometry")
    add_common(layout)

    frame = sub.add_parser("frame", help="Print the state of one frame")
    add_common(frame)
    when = frame.add_mutually_exclusive_group()
    when.add_argument("--frame", type=float, default=0.0, help="Frame index (default: 0)")
    when.add_argument("--time", type=float, default=None, help="Time in seconds")

    duration = sub.add_parser("duration", help="Print total timeline length")
    add_common(duration)

    return p


def run(argv: list[str] | None = None) -> int:
    """Parse arguments and run a command; returns the exit code."""
    args = build_arg_parser().parse_args(argv)

    try:
        app_config = load_app_config(args.app_config)
    except (FileNotFoundError, ValueError) as e:
        err_console.print(f"[red]ERROR: Could not load app config: {e}[/red]")
        return 1

    log = app_config.logging
    if args.log_level:
        try:
            log = LoggingConfig.model_validate(
                {**log.model_dump(), "level": args.log_level.upper()}
            )
        except ValidationError:
            err_console.print(f"[red]ERROR: Invalid --log-level: {args.log_level}[/red]")
            return 1

    configure_logging(
        level=log.level,
        format_string=log.format,
        filename=log.filename,
        structured=log.structured,
    )

    try:
        return _COMMANDS[args.cmd](args, app_config)
    except FileNotFoundError as e:
        err_console.print(f"[red]ERROR: {e}[/red]")
    except ValidationError as e:
        err_console.print(f"[red]ERROR: Invalid diagram document {args.config}:[/red]\n{e}")
    except LayoutReferenceError as e:
        err_console.print(f"[red]ERROR: {e}[/red]")
    except ValueError as e:
        err_console.print(f"[red]ERROR: {e}[/red]")
    return 1


def main() -> None:
    """Main entry point for CLI."""
    sys.exit(run())
