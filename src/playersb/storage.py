"""JSON file persistence for snapshots and feed payloads."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from playersb.errors import DataFileError
from playersb.models import PlayerSnapshot

_MISSING = object()


def read_json(path: Path, default: Any = _MISSING) -> Any:
    """Read a JSON document.

    With ``default`` the file is optional: an absent file yields ``default``.
    A file that exists but cannot be parsed is always an error.
    """

    if not path.exists():
        if default is not _MISSING:
            return default
        raise DataFileError(path, "file not found")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DataFileError(path, f"unreadable ({exc})") from exc
    if not text.strip() and default is not _MISSING:
        return default
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataFileError(path, f"malformed JSON ({exc.msg} at line {exc.lineno})") from exc


def write_json(path: Path, payload: Any) -> None:
    """Replace ``path`` wholesale with ``payload``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
            handle.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def list_field(payload: Any, key: str) -> list:
    """Return ``payload[key]`` when it is a list, else an empty list."""

    if isinstance(payload, dict) and isinstance(payload.get(key), list):
        return payload[key]
    if isinstance(payload, list) and key == "players":
        return payload
    return []


def load_snapshot(path: Path) -> PlayerSnapshot:
    data = read_json(path)
    if isinstance(data, list):
        data = {"players": data}
    if not isinstance(data, dict):
        raise DataFileError(path, "expected a JSON object with a 'players' list")
    try:
        return PlayerSnapshot.model_validate(data)
    except ValidationError as exc:
        raise DataFileError(path, f"invalid players snapshot ({exc.error_count()} errors)") from exc


def save_snapshot(path: Path, snapshot: PlayerSnapshot) -> None:
    write_json(path, snapshot.to_json())
