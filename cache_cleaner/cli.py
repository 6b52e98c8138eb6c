"""Command-line entry point: delete project cache folders, then restart."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import load_config, target_paths
from .host import ConsoleHost
from .remover import DirectoryRemover
from .runner import SynchronousRunner
from .strategies import default_strategy_chain
from .workflow import CleanupWorkflow


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cache-cleaner",
        description="Delete project cache/build folders and restart the application",
    )
    parser.add_argument(
        "--project-dir",
        default=None,
        help="Project root holding the cache folders. Resolution: CLI -> CC_PROJECT_DIR env var -> current directory",
    )
    parser.add_argument(
        "--targets",
        default=None,
        help=(
            "Comma-separated folder names relative to the project dir. "
            "Resolution: CLI -> CC_TARGETS env var -> .env.cache-cleaner -> .cache-cleaner.yml -> built-in default"
        ),
    )
    parser.add_argument(
        "--restart-command",
        default=None,
        help="Command launched after a successful cleanup. Resolution: CLI -> CC_RESTART_COMMAND env var -> .env.cache-cleaner",
    )
    parser.add_argument("--yes", "-y", action="store_true", help="Do not prompt for confirmation")
    parser.add_argument("--no-restart", action="store_true", help="Never launch the restart command")
    parser.add_argument("--dry-run", action="store_true", help="List the target folders without deleting anything")
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API instead of a one-off cleanup")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(
            project_dir=args.project_dir,
            targets=args.targets,
            restart_command=args.restart_command,
        )
    except (ValueError, OSError) as exc:
        raise SystemExit(f"[cache-cleaner] Invalid configuration: {exc}")

    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))

    if args.serve:
        from .app import create_app

        app = create_app(config)
        app.run(host="127.0.0.1", port=config.api_port)
        return 0

    paths = target_paths(config)
    if args.dry_run:
        for path in paths:
            state = "exists" if Path(path).is_dir() else "missing"
            print(f"[cache-cleaner] {path} ({state})")
        return 0

    host = ConsoleHost(
        restart_command=[] if args.no_restart else config.restart_command,
        assume_yes=args.yes,
    )
    workflow = CleanupWorkflow(
        host=host,
        runner=SynchronousRunner(),
        target_paths=paths,
        remover=DirectoryRemover(default_strategy_chain(force_timeout_seconds=config.force_delete_timeout_seconds)),
        restart_delay_seconds=config.restart_delay_seconds,
        restart_enabled=not args.no_restart,
    )

    if not workflow.request_cleanup():
        print("[cache-cleaner] Cleanup cancelled")
        return 0

    outcome = workflow.last_outcome
    if outcome is None or not outcome.success:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
