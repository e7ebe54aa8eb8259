from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from PIL import Image

from xrns_render.model.types import Song
from xrns_render.render.grid import render
from xrns_render.util.config import RenderConfig

_LOGGER = logging.getLogger("xrns_render.export")


def pattern_filename(index: int, prefix: str = "pattern") -> str:
    return f"{prefix}{index:02d}.png"


def save_png(image: Image.Image, path: str | Path) -> str:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    image.save(out, format="PNG")
    return str(out)


def export_patterns(
    song: Song,
    out_dir: str | Path,
    *,
    config: RenderConfig | None = None,
    indices: Iterable[int] | None = None,
    on_pattern: Callable[[int], None] | None = None,
) -> list[str]:
    """Render patterns (all, or `indices`) in ascending order and write one PNG each.

    `on_pattern` is called with each pattern index before it is rendered.
    """

    config = config or RenderConfig()
    chosen = sorted(set(indices)) if indices is not None else range(len(song.patterns))

    written: list[str] = []
    for index in chosen:
        if on_pattern is not None:
            on_pattern(index)
        image = render(song, index, config)
        path = save_png(image, Path(out_dir) / pattern_filename(index, config.prefix))
        _LOGGER.info("wrote %s (%dx%d)", path, image.width, image.height)
        written.append(path)
    return written
