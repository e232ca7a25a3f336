"""respawn command line: inspect the restart environment, trigger a supervisor.

``respawn inspect`` shows the supervision hints of the current environment
and the restart action they lead to. ``respawn kickstart LABEL`` asks the
platform's service manager to restart a job.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from respawn.config import get_config, load_config
from respawn.environment import PlatformInfo, SupervisionHints, snapshot_environment
from respawn.exceptions import UnsupportedPlatformError
from respawn.orchestrator import RestartOrchestrator, RestartPlan, plan_restart
from respawn.platform.factory import create_restart_trigger_from_config
from respawn.utils.logging import get_logger, setup_logging, setup_logging_from_config

log = get_logger("main")

_PLAN_STYLE = {
    RestartPlan.DISABLED: ("yellow", "Respawn disabled, nothing will happen"),
    RestartPlan.KICKSTART: ("cyan", "Kickstart the launchd job"),
    RestartPlan.SUPERVISED: ("green", "Exit and let the supervisor restart us"),
    RestartPlan.SPAWN: ("blue", "Spawn a detached replacement process"),
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="respawn", description="In-place process restart for long-running services"
    )
    parser.add_argument("--config", type=Path, help="Path to a config.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    parser.add_argument("--log-file", help="Write logs to this file instead of stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("inspect", help="Show supervision hints and the planned restart action")

    kick = sub.add_parser("kickstart", help="Ask the service manager to restart a job")
    kick.add_argument("label", help="launchd job label or systemd unit name")
    kick.add_argument("--timeout", type=float, help="Seconds to wait for the service manager")
    return parser


def render_hints(hints: SupervisionHints, plan: RestartPlan, env_prefix: str) -> Table:
    """Render supervision hints and the planned action as a table."""
    table = Table(title=f"respawn ({env_prefix}_*)", show_header=True)
    table.add_column("Hint")
    table.add_column("Value")

    for field in dataclasses.fields(hints):
        value = getattr(hints, field.name)
        if isinstance(value, bool):
            cell = Text("yes", style="green") if value else Text("no", style="dim")
        else:
            cell = Text(str(value)) if value is not None else Text("-", style="dim")
        table.add_row(field.name, cell)

    color, description = _PLAN_STYLE[plan]
    table.add_row("planned action", Text(f"{plan.value}: {description}", style=f"bold {color}"))
    return table


def _cmd_inspect(config: dict, console: Console) -> int:
    orchestrator = RestartOrchestrator(config=config)
    hints = orchestrator.inspect(snapshot_environment(), PlatformInfo.current())
    console.print(render_hints(hints, plan_restart(hints), orchestrator.env_prefix))
    return 0


def _cmd_kickstart(config: dict, console: Console, label: str, timeout: float | None) -> int:
    if timeout is not None:
        config = {**config, "kickstart": {**config["kickstart"], "timeout_sec": timeout}}

    try:
        trigger = create_restart_trigger_from_config(config)
    except UnsupportedPlatformError as e:
        console.print(Text(str(e), style="red"))
        return 2

    result = trigger.attempt(label)
    if result.ok:
        console.print(Text(f"{label}: restarted via {result.method}", style="green"))
        return 0

    console.print(Text(f"{label}: {result.method} restart failed: {result.detail}", style="red"))
    return 1


def main(argv: list[str] | None = None) -> None:
    """Run the respawn CLI."""
    args = _build_parser().parse_args(argv)

    # Load config first, then set up logging from config values.
    # If config loading fails, fall back to stderr logging.
    try:
        config = load_config(args.config) if args.config else get_config()
    except Exception as e:
        setup_logging(level=logging.DEBUG)
        log.error("Failed to load config: %s", e)
        raise SystemExit(1) from e

    setup_logging_from_config(config["logging"], verbose=args.verbose, log_file=args.log_file)

    console = Console()
    if args.command == "inspect":
        code = _cmd_inspect(config, console)
    else:
        code = _cmd_kickstart(config, console, args.label, args.timeout)
    raise SystemExit(code)


if __name__ == "__main__":
    main()
