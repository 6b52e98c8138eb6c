from __future__ import annotations

from pathlib import Path

from flask import Blueprint, jsonify, request

from .workflow import CleanupWorkflow


def _safe_directory_size_bytes(path: str) -> int:
    root = Path(path)
    try:
        if not root.exists():
            return 0
        if root.is_file():
            return int(root.stat().st_size)

        total = 0
        for item in root.rglob("*"):
            if item.is_file() and not item.is_symlink():
                total += int(item.stat().st_size)
        return total
    except (PermissionError, OSError):
        return 0


def _parse_cleanup_payload(payload: dict) -> None:
    confirm = payload.get("confirm")
    if confirm is not True:
        raise ValueError("confirm must be true to start a cleanup")


def create_api_blueprint(*, workflow: CleanupWorkflow, runner) -> Blueprint:
    blueprint = Blueprint("cache_cleaner_api", __name__)

    @blueprint.get("/targets")
    def list_targets() -> tuple:
        out = []
        for path in workflow.target_paths:
            exists = Path(path).is_dir()
            out.append(
                {
                    "path": path,
                    "exists": exists,
                    "current_bytes": _safe_directory_size_bytes(path) if exists else 0,
                }
            )
        return jsonify(out), 200

    @blueprint.post("/cleanup")
    def start_cleanup() -> tuple:
        payload = request.get_json(silent=True) or {}
        try:
            _parse_cleanup_payload(payload)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        if not workflow.start_cleanup():
            return jsonify({"error": "cleanup already in progress"}), 409
        return jsonify({"status": "started", "targets": workflow.target_paths}), 202

    @blueprint.get("/cleanup")
    def cleanup_status() -> tuple:
        outcome = workflow.last_outcome
        return (
            jsonify(
                {
                    "running": workflow.is_running,
                    "last_outcome": outcome.to_dict() if outcome is not None else None,
                }
            ),
            200,
        )

    @blueprint.get("/health")
    def health() -> tuple:
        return (
            jsonify(
                {
                    "status": "ok",
                    "runner_running": runner.is_running,
                }
            ),
            200,
        )

    return blueprint
