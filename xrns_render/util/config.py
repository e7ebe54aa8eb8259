from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from xrns_render.errors import InvalidConfigError
from xrns_render.render.colors import DEFAULT_PALETTE, RGBA, Category, ColorPair, Palette

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})([0-9a-fA-F]{2})?$")


def default_config_dir() -> Path:
    return Path.home() / ".config" / "xrns-render"


def default_config_path() -> Path:
    return default_config_dir() / "config.yaml"


def parse_color(value: str) -> RGBA:
    """Parse "#RRGGBB" or "#RRGGBBAA" into an RGBA tuple."""

    m = _HEX_RE.match(str(value).strip())
    if m is None:
        raise InvalidConfigError(f"invalid color: {value!r}")
    rgb = bytes.fromhex(m.group(1))
    alpha = int(m.group(2), 16) if m.group(2) else 255
    return (rgb[0], rgb[1], rgb[2], alpha)


@dataclass
class RenderConfig:
    # Paint the editor background (and beat-row bands) instead of leaving it transparent.
    background: bool = False
    prefix: str = "pattern"
    # category name -> {"normal": "#RRGGBB", "highlighted": "#RRGGBB"}
    colors: dict[str, dict[str, str]] = field(default_factory=dict)

    def palette(self) -> Palette:
        pal: dict[Category, ColorPair] = dict(DEFAULT_PALETTE)
        for name, pair in self.colors.items():
            try:
                category = Category(name)
            except ValueError:
                raise InvalidConfigError(f"unknown color category: {name!r}") from None
            if not isinstance(pair, dict):
                raise InvalidConfigError(f"color {name!r} must be a mapping with normal/highlighted")
            base = pal[category]
            pal[category] = ColorPair(
                normal=parse_color(pair["normal"]) if "normal" in pair else base.normal,
                highlighted=parse_color(pair["highlighted"]) if "highlighted" in pair else base.highlighted,
            )
        return pal

    def to_dict(self) -> dict[str, Any]:
        return {
            "background": self.background,
            "prefix": self.prefix,
            "colors": {k: dict(v) for k, v in self.colors.items()},
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "RenderConfig":
        colors = d.get("colors") or {}
        if not isinstance(colors, dict):
            raise InvalidConfigError("colors must be a mapping")
        cfg = RenderConfig(
            background=bool(d.get("background", False)),
            prefix=str(d.get("prefix") or "pattern"),
            colors={str(k): dict(v) if isinstance(v, dict) else v for k, v in colors.items()},
        )
        cfg.palette()  # validates color entries
        return cfg


def load_config(path: Path | None = None) -> RenderConfig:
    p = path or default_config_path()
    if not p.exists():
        return RenderConfig()
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise InvalidConfigError(f"malformed config YAML: {p}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfigError("config YAML must be a mapping/object")
    return RenderConfig.from_dict(data)
