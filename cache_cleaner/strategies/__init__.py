from .base import DeleteStrategy
from .bulk_remove import BulkRemoveStrategy
from .force_remove import ForceRemoveStrategy, build_force_delete_cmd
from .manual_remove import ManualRemoveStrategy


STRATEGY_REGISTRY: dict[str, DeleteStrategy] = {
    "bulk": BulkRemoveStrategy(),
    "manual": ManualRemoveStrategy(),
    "force": ForceRemoveStrategy(),
}


def default_strategy_chain(*, force_timeout_seconds: float | None = None) -> list[DeleteStrategy]:
    """Cheapest first: bulk removal, manual walk, then the OS command."""
    force = STRATEGY_REGISTRY["force"]
    if force_timeout_seconds is not None:
        force = ForceRemoveStrategy(timeout_seconds=force_timeout_seconds)
    return [STRATEGY_REGISTRY["bulk"], STRATEGY_REGISTRY["manual"], force]


__all__ = [
    "DeleteStrategy",
    "BulkRemoveStrategy",
    "ManualRemoveStrategy",
    "ForceRemoveStrategy",
    "build_force_delete_cmd",
    "default_strategy_chain",
    "STRATEGY_REGISTRY",
]
