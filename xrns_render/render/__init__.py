"""Pattern rendering.

Turns a loaded Song into one RGBA raster per pattern, laid out like the
Renoise pattern editor:
- layout: per-track pixel widths and offsets
- colors: category palette and effect-command classification
- font: 8x8 bitmap glyphs and the pixel blitter
- grid: dense row reconstruction and painting
- export: PNG output with deterministic file names
"""
