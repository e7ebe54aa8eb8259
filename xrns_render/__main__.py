from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from xrns_render.errors import XrnsRenderError
from xrns_render.model.types import Song


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="xrns-render",
        add_help=True,
        formatter_class=argparse.RawTextHelpFormatter,
        description="xrns-render — render Renoise song patterns to PNG images, one per pattern\n",
    )

    p.add_argument("--version", action="store_true", help="Print version and exit.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    sub = p.add_subparsers(dest="cmd")

    rp = sub.add_parser("render", help="Render every pattern (or the selected ones) to PNG.")
    rp.add_argument("song", help="Path to a Renoise song (.xrns) or song JSON (.json)")
    rp.add_argument("--out-dir", default=".", dest="out_dir", help="Directory for the PNG files (default: .)")
    rp.add_argument("--prefix", default=None, help="File name prefix (default: pattern -> pattern00.png)")
    rp.add_argument(
        "--pattern",
        type=int,
        action="append",
        default=None,
        dest="patterns",
        help="Pattern index to render (repeatable). Default: all patterns.",
    )
    rp.add_argument("--config", default=None, help="Render config YAML (colors/background/prefix)")
    rp.add_argument("--background", action="store_true", help="Paint the editor background and beat rows.")

    ip = sub.add_parser("info", help="Print song metadata, tracks, patterns and sequence.")
    ip.add_argument("song", help="Path to a Renoise song (.xrns) or song JSON (.json)")

    jp = sub.add_parser("export-json", help="Write the loaded song model as JSON.")
    jp.add_argument("song", help="Path to a Renoise song (.xrns)")
    jp.add_argument("out", help="Output JSON path")

    return p


def _load(path: str) -> Song:
    from xrns_render.io.xrns import load_song

    song_path = Path(path).expanduser()
    print(f"Reading {song_path}")
    song = load_song(song_path)
    gsd = song.global_song_data
    print(f"Loaded song {gsd.song_name} by {gsd.artist}")
    return song


def _cmd_render(args: argparse.Namespace) -> None:
    from xrns_render.render.export import export_patterns
    from xrns_render.util.config import load_config

    cfg = load_config(Path(args.config).expanduser() if args.config else None)
    if args.background:
        cfg.background = True
    if args.prefix:
        cfg.prefix = str(args.prefix)

    song = _load(args.song)
    print("Rendering images")
    written = export_patterns(
        song,
        Path(args.out_dir).expanduser(),
        config=cfg,
        indices=args.patterns,
        on_pattern=lambda i: print(f"pattern {i:02d}"),
    )
    for pth in written:
        print(f"wrote {pth}")


def _cmd_info(args: argparse.Namespace) -> None:
    song = _load(args.song)
    gsd = song.global_song_data
    print(f"bpm: {gsd.beats_per_min}  lpb: {gsd.lines_per_beat}  tpl: {gsd.ticks_per_line}")

    print(f"tracks: {len(song.tracks)}")
    for i, t in enumerate(song.tracks):
        flags = (
            ("vol", t.volume_column_is_visible),
            ("pan", t.panning_column_is_visible),
            ("dly", t.delay_column_is_visible),
        )
        extras = [name for name, on in flags if on]
        print(
            f"- {i:02d} {t.name}: notes={t.number_of_visible_note_columns} "
            f"fx={t.number_of_visible_effect_columns} {' '.join(extras)}".rstrip()
        )

    print(f"patterns: {len(song.patterns)}")
    for i, pat in enumerate(song.patterns):
        aliases = [f"{ti}->{pt.alias_pattern_index}" for ti, pt in enumerate(pat.tracks) if pt.is_alias]
        line = f"- {i:02d}: {pat.number_of_lines} lines"
        if aliases:
            line += f" (alias {', '.join(aliases)})"
        print(line)

    print(f"sequence: {len(song.pattern_sequence.sequence_entries)}")
    for i, e in enumerate(song.pattern_sequence.sequence_entries):
        muted = f" muted={e.muted_tracks}" if e.muted_tracks else ""
        section = f" [{e.section_name}]" if e.section_name else ""
        print(f"- {i:02d}: pattern {e.pattern:02d}{section}{muted}")


def _cmd_export_json(args: argparse.Namespace) -> None:
    from xrns_render.io.song_json import save_song

    song = _load(args.song)
    print(f"wrote {save_song(song, Path(args.out).expanduser())}")


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if getattr(args, "version", False):
        try:
            from importlib.metadata import version

            v = version("xrns-render")
        except Exception:
            v = "0.0.0"
        print(f"xrns-render {v}")
        return

    commands = {
        "render": _cmd_render,
        "info": _cmd_info,
        "export-json": _cmd_export_json,
    }
    handler = commands.get(args.cmd)
    if handler is None:
        parser.print_help()
        return

    try:
        handler(args)
    except XrnsRenderError as e:
        raise SystemExit(f"ERROR: {e}")


if __name__ == "__main__":
    main()
