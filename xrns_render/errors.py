from __future__ import annotations


class XrnsRenderError(Exception):
    """Base error for xrns-render."""


class SongFormatError(XrnsRenderError):
    """Raised when a song container or document cannot be read into a Song."""


class RenderPreconditionError(XrnsRenderError):
    """Raised when a song model violates the structure the renderer relies on."""


class InvalidConfigError(XrnsRenderError):
    """Raised when a render config cannot be parsed or validated."""
