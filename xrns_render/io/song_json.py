from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from xrns_render.errors import SongFormatError
from xrns_render.model.types import Song


def load_song_json(path: str | Path) -> Song:
    p = Path(path)
    try:
        data: dict[str, Any] = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SongFormatError(f"malformed song JSON: {p}: {e}") from e
    except OSError as e:
        raise SongFormatError(f"cannot read {p}: {e.strerror or e}") from e
    if not isinstance(data, dict):
        raise SongFormatError(f"song JSON must be an object: {p}")
    try:
        return Song.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise SongFormatError(f"bad song JSON: {p}: {e}") from e


def save_song(song: Song, path: str | Path) -> str:
    out_path = Path(path).expanduser()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(song.to_dict(), indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return str(out_path)
