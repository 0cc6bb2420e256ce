"""Atomic JSON writes for configuration files."""

from __future__ import annotations

import json
import os
import tempfile


def save_json(path: str, data: dict) -> None:
    """Write *data* to *path* through a temp file in the same directory.

    The target is replaced with ``os.replace`` so readers never observe a
    half-written file; the temp file is removed if serialization fails.
    """
    dir_path = os.path.dirname(os.path.abspath(path))
    os.makedirs(dir_path, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=dir_path, prefix=".maskedit-", suffix=".json.tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
