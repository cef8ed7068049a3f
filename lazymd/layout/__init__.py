"""Width-aware layout of Markdown blocks into styled terminal lines."""

from .cells import Attr, Line, Style, StyledCell, line_text
from .engine import layout

__all__ = ["Attr", "Line", "Style", "StyledCell", "layout", "line_text"]
