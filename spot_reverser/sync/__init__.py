"""
Synchronization workflow for spot-reverser.

    - compute_order: pure newest-first ordering (Reorder Engine)
    - run_sync: one complete token -> reset -> fetch -> reorder -> append run
    - preview_order: read-only variant returning the computed order

Usage:
    from spot_reverser.core import load_config
    from spot_reverser.sync import run_sync

    result = run_sync(load_config())
    print(f"{result.written} songs written")
"""

from spot_reverser.sync.reorder import compute_order
from spot_reverser.sync.workflow import SyncResult, preview_order, run_sync

__all__ = [
    "compute_order",
    "run_sync",
    "preview_order",
    "SyncResult",
]
