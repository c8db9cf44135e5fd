"""Outline parsing, indent-tree connectors and progressive reveal layout."""

from .analyzer import analyze_line, parse_segments
from .checkbox_style import CheckboxGlyph, CheckboxStyle, style_for
from .config import LayoutConfig, OutlineConfig, TagPalette
from .document import derive_document
from .models import (
    CheckboxState,
    Connector,
    Document,
    LineAnalysis,
    MarkerKind,
    ParsedLine,
    PositionedToken,
    Token,
    TokenKind,
)
from .reveal import (
    connector_span_at,
    reveal_document,
    reveal_portion,
    reveal_token,
)
from .tokenizer import tokenize

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Parsing
    "tokenize",
    "analyze_line",
    "parse_segments",
    "derive_document",
    # Reveal
    "reveal_portion",
    "reveal_token",
    "reveal_document",
    "connector_span_at",
    # Styling
    "style_for",
    "CheckboxGlyph",
    "CheckboxStyle",
    # Config
    "LayoutConfig",
    "TagPalette",
    "OutlineConfig",
    # Models
    "CheckboxState",
    "Connector",
    "Document",
    "LineAnalysis",
    "MarkerKind",
    "ParsedLine",
    "PositionedToken",
    "Token",
    "TokenKind",
]
