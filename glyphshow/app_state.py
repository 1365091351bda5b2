"""
Glyphshow – app_state.py
========================

UI state of the glyph browser: the configured font files, the glyphs of the
currently selected font, which pane has the focus, and a bounded log of
diagnostics.

The glyph list always describes the selected font. Every font change reloads
it through the injected extractor; extraction failures never escape from this
module, they degrade to an empty glyph list and a diagnostic line.
"""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from glyphshow.extract_glyphs import (
    ExtractionError,
    Extractor,
    GlyphRecord,
    make_extractor,
)
from glyphshow.selectable_list import SelectableList

MAX_DIAGNOSTICS = 200


@dataclass(frozen=True)
class FontEntry:
    """A configured font file and its position in the configuration."""

    index: int
    path: Path

    @property
    def label(self) -> str:
        return f"{self.index} - {self.path}"


class Focus(enum.Enum):
    FONTS = "fonts"
    GLYPHS = "glyphs"


class AppState:
    """Font list, glyph list of the selected font, focus and diagnostics.

    Args:
        font_paths: Font files, in display order.
        extractor: ``(path, diagnostics) -> records`` callable. Defaults to
            the ``otfinfo`` backend.
        use_cache: Keep successful extractions in memory, keyed by path, so
            revisiting a font does not re-run the extractor.
    """

    def __init__(
        self,
        font_paths: Iterable[Path | str],
        extractor: Extractor | None = None,
        *,
        use_cache: bool = True,
    ):
        self._extractor = extractor or make_extractor("otfinfo")
        self._use_cache = use_cache
        self._cache: dict[Path, tuple[GlyphRecord, ...]] = {}

        self.fonts: SelectableList[FontEntry] = SelectableList(
            FontEntry(i, Path(p)) for i, p in enumerate(font_paths)
        )
        self.glyphs: SelectableList[GlyphRecord] = SelectableList()
        self.focus = Focus.FONTS
        self.glyph_error: str | None = None
        self.diagnostics: deque[str] = deque(maxlen=MAX_DIAGNOSTICS)

        self._reload_glyphs()

    # -------------------------------
    # Glyph loading
    # -------------------------------
    def _reload_glyphs(self) -> None:
        font = self.fonts.selected()
        self.glyph_error = None
        if font is None:
            self.glyphs.replace_items(())
            return

        cached = self._cache.get(font.path) if self._use_cache else None
        if cached is not None:
            self.glyphs.replace_items(cached)
            return

        record_errors: list[ExtractionError] = []
        try:
            records = tuple(self._extractor(font.path, record_errors))
        except ExtractionError as e:
            self.glyph_error = str(e)
            self.glyphs.replace_items(())
            self.diagnostics.append(f"❌ {font.path.name}: {e}")
            return

        for err in record_errors:
            self.diagnostics.append(f"⚠️  {font.path.name}: skipped {err}")
        if self._use_cache:
            self._cache[font.path] = records
        self.glyphs.replace_items(records)

    def reload(self) -> None:
        """Forget the cached glyphs of the selected font and extract again."""
        font = self.fonts.selected()
        if font is not None:
            self._cache.pop(font.path, None)
        self._reload_glyphs()

    # -------------------------------
    # Navigation
    # -------------------------------
    def select_next_font(self) -> None:
        self.fonts.next()
        self._reload_glyphs()

    def select_previous_font(self) -> None:
        self.fonts.previous()
        self._reload_glyphs()

    def select_next_glyph(self) -> None:
        self.glyphs.next()

    def select_previous_glyph(self) -> None:
        self.glyphs.previous()

    def select_next(self) -> None:
        """Move the cursor of the focused list forward."""
        if self.focus is Focus.FONTS:
            self.select_next_font()
        else:
            self.select_next_glyph()

    def select_previous(self) -> None:
        """Move the cursor of the focused list backward."""
        if self.focus is Focus.FONTS:
            self.select_previous_font()
        else:
            self.select_previous_glyph()

    def focus_fonts(self) -> None:
        self.focus = Focus.FONTS

    def focus_glyphs(self) -> None:
        self.focus = Focus.GLYPHS

    def toggle_focus(self) -> None:
        self.focus = Focus.GLYPHS if self.focus is Focus.FONTS else Focus.FONTS

    # -------------------------------
    # Views
    # -------------------------------
    def selected_font(self) -> FontEntry | None:
        return self.fonts.selected()

    def selected_glyph(self) -> GlyphRecord | None:
        return self.glyphs.selected()

    def last_diagnostic(self) -> str | None:
        return self.diagnostics[-1] if self.diagnostics else None
