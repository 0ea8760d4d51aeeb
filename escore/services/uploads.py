# escore/services/uploads.py

from __future__ import annotations

import logging
import random
import shutil
import time
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)


def make_upload_name(original_name: str | None) -> str:
    """<epoch-ms>-<zufall><ext>, z.B. 1718000000000-123456789.png"""
    ext = Path(original_name or "").suffix
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"


def store_upload(upload_dir: Path, original_name: str | None, source: BinaryIO) -> str:
    """Speichert die Datei im Upload-Verzeichnis und liefert den neuen Dateinamen."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    name = make_upload_name(original_name)
    with open(upload_dir / name, "wb") as target:
        shutil.copyfileobj(source, target)
    logger.info("[UPLOAD] %s gespeichert (%s)", name, original_name)
    return name
