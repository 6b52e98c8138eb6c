from __future__ import annotations

import logging

from flask import Flask

from .api import create_api_blueprint
from .config import CleanerConfig, load_config, target_paths
from .host import CommandHost
from .remover import DirectoryRemover
from .runner import CleanupRunner
from .strategies import default_strategy_chain
from .workflow import CleanupWorkflow


def create_app(config: CleanerConfig | None = None) -> Flask:
    app = Flask(__name__)

    config = config or load_config()
    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))

    # /api/cleanup callers confirm up front; a partial failure never restarts.
    host = CommandHost(restart_command=config.restart_command, assume_yes=False)
    runner = CleanupRunner()
    runner.start()

    workflow = CleanupWorkflow(
        host=host,
        runner=runner,
        target_paths=target_paths(config),
        remover=DirectoryRemover(default_strategy_chain(force_timeout_seconds=config.force_delete_timeout_seconds)),
        restart_delay_seconds=config.restart_delay_seconds,
    )

    app.register_blueprint(create_api_blueprint(workflow=workflow, runner=runner), url_prefix="/api")
    app.extensions["cleanup_runner"] = runner
    app.extensions["cleanup_workflow"] = workflow
    app.config["CACHE_CLEANER_API_PORT"] = config.api_port

    return app


def main() -> None:
    app = create_app()
    app.run(host="127.0.0.1", port=int(app.config["CACHE_CLEANER_API_PORT"]))


if __name__ == "__main__":
    main()
