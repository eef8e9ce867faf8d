"""JSON file helpers shared by the repositories."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import RLock

logger = logging.getLogger(__name__)

# Serializes read-modify-write cycles on the data files within this process
STORE_LOCK = RLock()


def load_json(path: Path, default):
    """Read a JSON document, returning `default` when the file is missing or unreadable."""
    if not os.path.exists(path):
        return default
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
        return default
    return data if data is not None else default


def atomic_write(path: Path, data) -> None:
    """Write JSON to a temp file next to `path` and move it into place."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path), prefix=".mealplan_", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


__all__ = ['STORE_LOCK', 'load_json', 'atomic_write']
