"""Write and read JSON checkpoints of the in-memory stores.

The stores stay authoritative in memory; a checkpoint is a point-in-time
copy written at shutdown and loaded at startup when ``CHECKPOINT_FILE`` is
configured.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from ..models.snapshot import StoreSnapshot
from .container import AppContainer


def save_checkpoint(container: AppContainer, path: str | Path) -> Path:
    """Persist a snapshot of every store to ``path``.

    The file is written next to its destination first and then moved into
    place, so an interrupted write never leaves a truncated checkpoint.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = container.snapshot().model_dump(mode="json")
    tmp_path = target.with_suffix(target.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, ensure_ascii=True, indent=2)
        os.replace(tmp_path, target)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.info("Checkpoint written to {}", target)
    return target


def load_checkpoint(container: AppContainer, path: str | Path) -> bool:
    """Restore every store from ``path``.

    Returns ``False`` and leaves the stores untouched when the file is
    missing or cannot be parsed.
    """
    source = Path(path)
    if not source.is_file():
        logger.info("No checkpoint at {}, starting empty", source)
        return False
    try:
        with source.open("r", encoding="utf-8") as handle:
            snapshot = StoreSnapshot.model_validate(json.load(handle))
    except (OSError, ValueError, ValidationError) as exc:
        # ValueError covers undecodable bytes as well as malformed JSON
        logger.warning("Failed to load checkpoint from {}: {}", source, exc)
        return False
    container.restore(snapshot)
    logger.info("Checkpoint restored from {}", source)
    return True
