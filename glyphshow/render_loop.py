"""
Glyphshow – render_loop.py
==========================

Full-screen curses front end of the glyph browser.

The loop itself (:func:`run_loop`) only talks to a *terminal* object with two
methods, so it can be driven by a scripted terminal in tests:

- ``paint(state)``: draw the whole screen from an :class:`AppState`;
- ``poll_event(timeout)``: wait up to ``timeout`` seconds for a key and
  return its code, or ``None`` when nothing arrived.

:class:`CursesTerminal` is the real backend and :func:`terminal_session`
acquires and releases the terminal around it.

Layout::

    +- TTF Files -----------+- Available characters -+
    | >> 0 - /path/a.ttf    |    U+0041  A      36  A |
    |    1 - /path/b.ttf    | >> U+0042  B      37  B |
    |                       |  U+0042 B  LATIN ...    |
    +-----------------------+------------------------+
     j/k:move  Tab:pane  q:quit          <diagnostic>
"""

from __future__ import annotations

import curses
import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Protocol, TypeVar

from glyphshow.app_state import AppState, Focus
from glyphshow.coverage import char_name, printable_char, unicode_block
from glyphshow.extract_glyphs import GlyphRecord

T = TypeVar("T")

# Keys
KEY_QUIT = {ord("q"), ord("Q"), 3}  # 3: Ctrl-C in raw mode
KEY_NEXT = {ord("j"), curses.KEY_DOWN}
KEY_PREVIOUS = {ord("k"), curses.KEY_UP}
KEY_TOGGLE_FOCUS = {9}  # Tab
KEY_FOCUS_FONTS = {ord("h"), curses.KEY_LEFT}
KEY_FOCUS_GLYPHS = {ord("l"), curses.KEY_RIGHT}
KEY_RELOAD = {ord("r")}

HIGHLIGHT_SYMBOL = ">> "
STATUS_HELP = " j/k:move  Tab/h/l:pane  r:reload  q:quit "

# Color pairs (initialised in CursesTerminal.__init__)
CP_BORDER = 1
CP_FOCUS_BORDER = 2
CP_CURSOR = 3
CP_ERROR = 4
CP_WARNING = 5
CP_STATUS = 6


class Terminal(Protocol):
    def paint(self, state: AppState) -> None: ...

    def poll_event(self, timeout: float) -> int | None: ...


# -----------------------
# Control loop
# -----------------------
def dispatch_key(state: AppState, key: int) -> bool:
    """Apply one key press to ``state``.

    Returns:
        ``True`` when the key asks to quit, ``False`` otherwise. Unknown keys
        and ``KEY_RESIZE`` are ignored.
    """
    if key in KEY_QUIT:
        return True
    if key in KEY_NEXT:
        state.select_next()
    elif key in KEY_PREVIOUS:
        state.select_previous()
    elif key in KEY_TOGGLE_FOCUS:
        state.toggle_focus()
    elif key in KEY_FOCUS_FONTS:
        state.focus_fonts()
    elif key in KEY_FOCUS_GLYPHS:
        state.focus_glyphs()
    elif key in KEY_RELOAD:
        state.reload()
    return False


def run_loop(
    state: AppState,
    tick_interval: float,
    terminal: Terminal,
    *,
    clock: Callable[[], float] = time.monotonic,
    on_tick: Callable[[AppState], None] | None = None,
) -> None:
    """Paint, wait for input, dispatch; until the quit key is pressed.

    The screen is repainted at the start of every iteration. Input is awaited
    for at most the time left in the current tick, so the screen is redrawn
    at least once per ``tick_interval`` seconds. Terminal errors raised by
    ``terminal`` propagate to the caller.

    Args:
        state: State to display and mutate.
        tick_interval: Tick length in seconds.
        terminal: Painting and input backend.
        clock: Monotonic time source, in seconds.
        on_tick: Called with ``state`` at every tick boundary.
    """
    last_tick = clock()
    while True:
        terminal.paint(state)

        remaining = max(tick_interval - (clock() - last_tick), 0.0)
        key = terminal.poll_event(remaining)
        if key is not None and dispatch_key(state, key):
            return

        if clock() - last_tick >= tick_interval:
            last_tick = clock()
            if on_tick is not None:
                on_tick(state)


# -----------------------
# Text helpers
# -----------------------
def glyph_label(glyph: GlyphRecord) -> str:
    return f"{glyph.code:<9} {printable_char(glyph.codepoint)}  {glyph.glyph_index:>6}  {glyph.name}"


def glyph_detail(glyph: GlyphRecord) -> str:
    """One-line description of a glyph for the detail row."""
    name = char_name(glyph.codepoint) or "<unnamed>"
    return (
        f"{glyph.code} {printable_char(glyph.codepoint)}  {name}  "
        f"[{unicode_block(glyph.codepoint)}]  glyph {glyph.glyph_index} {glyph.name}"
    )


def scroll_offset_for(selected: int | None, offset: int, height: int) -> int:
    """Return the first visible row so that ``selected`` stays in view."""
    if selected is None or height <= 0:
        return 0
    if selected < offset:
        return selected
    if selected >= offset + height:
        return selected - height + 1
    return offset


# -----------------------
# Panels
# -----------------------
class ListPanel:
    """Bordered panel showing a list with a highlighted cursor row."""

    def __init__(self, title: str = ""):
        self.title = title
        self.y = self.x = self.h = self.w = 0
        self.focused = False
        self.scroll_offset = 0

    def resize(self, y: int, x: int, h: int, w: int) -> None:
        self.y, self.x, self.h, self.w = y, x, h, w

    @property
    def inner_h(self) -> int:
        return max(self.h - 2, 0)

    @property
    def inner_w(self) -> int:
        return max(self.w - 2, 0)

    def draw_border(self, stdscr) -> None:
        if self.h < 2 or self.w < 2:
            return
        attr = curses.color_pair(CP_FOCUS_BORDER if self.focused else CP_BORDER)
        try:
            stdscr.attron(attr)
            stdscr.addch(self.y, self.x, curses.ACS_ULCORNER)
            stdscr.hline(self.y, self.x + 1, curses.ACS_HLINE, self.w - 2)
            stdscr.addch(self.y, self.x + self.w - 1, curses.ACS_URCORNER)
            for row in range(1, self.h - 1):
                stdscr.addch(self.y + row, self.x, curses.ACS_VLINE)
                stdscr.addch(self.y + row, self.x + self.w - 1, curses.ACS_VLINE)
            stdscr.addch(self.y + self.h - 1, self.x, curses.ACS_LLCORNER)
            stdscr.hline(self.y + self.h - 1, self.x + 1, curses.ACS_HLINE, self.w - 2)
            stdscr.addch(self.y + self.h - 1, self.x + self.w - 1, curses.ACS_LRCORNER)
        except curses.error:
            # clipped at the window edge
            pass
        finally:
            stdscr.attroff(attr)

        if self.title:
            label = f" {self.title} "
            self.safe_addnstr(
                stdscr,
                self.y,
                self.x + 2,
                label,
                min(len(label), self.w - 4),
                attr | curses.A_BOLD,
            )

    def safe_addnstr(self, stdscr, row: int, col: int, text: str, maxlen: int, attr: int = 0) -> None:
        """Write text clamped to the panel, ignoring curses boundary errors."""
        if row < 0 or col < 0 or maxlen <= 0:
            return
        try:
            stdscr.addnstr(row, col, text, maxlen, attr)
        except curses.error:
            pass

    def draw(
        self,
        stdscr,
        items: Sequence[T],
        selected: int | None,
        label: Callable[[T], str] = str,
        footer: Sequence[tuple[str, int]] = (),
    ) -> None:
        """Draw the visible window of ``items``; only visible rows are formatted."""
        self.draw_border(stdscr)
        iw, ih = self.inner_w, self.inner_h
        if iw <= 0 or ih <= 0:
            return

        list_h = max(ih - len(footer), 0)
        self.scroll_offset = scroll_offset_for(selected, self.scroll_offset, list_h)

        row0, col0 = self.y + 1, self.x + 1
        for i in range(list_h):
            idx = self.scroll_offset + i
            if idx >= len(items):
                break
            if idx == selected:
                prefix = HIGHLIGHT_SYMBOL
                attr = curses.color_pair(CP_CURSOR) | curses.A_BOLD
            else:
                prefix = " " * len(HIGHLIGHT_SYMBOL)
                attr = 0
            self.safe_addnstr(stdscr, row0 + i, col0, (prefix + label(items[idx])).ljust(iw), iw, attr)

        for i, (text, attr) in enumerate(footer):
            self.safe_addnstr(stdscr, row0 + list_h + i, col0, text.ljust(iw), iw, attr)


# -----------------------
# Curses backend
# -----------------------
class CursesTerminal:
    MIN_COLS = 40
    MIN_ROWS = 8
    MARGIN = 1

    def __init__(self, stdscr):
        self.stdscr = stdscr
        stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass

        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(CP_BORDER, curses.COLOR_WHITE, -1)
            curses.init_pair(CP_FOCUS_BORDER, curses.COLOR_CYAN, -1)
            curses.init_pair(CP_CURSOR, curses.COLOR_WHITE, curses.COLOR_BLACK)
            curses.init_pair(CP_ERROR, curses.COLOR_RED, -1)
            curses.init_pair(CP_WARNING, curses.COLOR_YELLOW, -1)
            curses.init_pair(CP_STATUS, curses.COLOR_BLACK, curses.COLOR_WHITE)

        self.font_panel = ListPanel("TTF Files")
        self.glyph_panel = ListPanel("Available characters")

    # -- input ---------------------------------------------------------------

    def poll_event(self, timeout: float) -> int | None:
        self.stdscr.timeout(max(int(timeout * 1000), 0))
        key = self.stdscr.getch()
        if key == -1:
            return None
        return key

    # -- drawing -------------------------------------------------------------

    def _compute_layout(self, max_y: int, max_x: int) -> bool:
        if max_y < self.MIN_ROWS or max_x < self.MIN_COLS:
            return False
        m = self.MARGIN
        usable_h = max_y - 1 - 2 * m  # last row is the status bar
        usable_w = max_x - 2 * m
        left_w = usable_w // 2
        self.font_panel.resize(m, m, usable_h, left_w)
        self.glyph_panel.resize(m, m + left_w, usable_h, usable_w - left_w)
        return True

    def _draw_status_bar(self, state: AppState, max_y: int, max_x: int) -> None:
        line = STATUS_HELP
        font = state.selected_font()
        if font is not None:
            line += f" [{font.index + 1}/{len(state.fonts)}] {len(state.glyphs)} glyphs "
        diagnostic = state.last_diagnostic()
        if diagnostic:
            line += f" {diagnostic}"
        try:
            self.stdscr.addnstr(max_y - 1, 0, line.ljust(max_x), max_x - 1, curses.color_pair(CP_STATUS))
        except curses.error:
            pass

    def paint(self, state: AppState) -> None:
        stdscr = self.stdscr
        stdscr.erase()
        max_y, max_x = stdscr.getmaxyx()

        if not self._compute_layout(max_y, max_x):
            msg = f"Please resize terminal (min {self.MIN_COLS}x{self.MIN_ROWS})"
            try:
                stdscr.addnstr(max_y // 2, max((max_x - len(msg)) // 2, 0), msg, max_x,
                               curses.color_pair(CP_WARNING) | curses.A_BOLD)
            except curses.error:
                pass
            stdscr.refresh()
            return

        self.font_panel.focused = state.focus is Focus.FONTS
        self.glyph_panel.focused = state.focus is Focus.GLYPHS

        self.font_panel.draw(
            stdscr,
            state.fonts.items,
            state.fonts.selected_index,
            label=lambda f: f.label,
        )

        footer: list[tuple[str, int]] = []
        glyph = state.selected_glyph()
        if state.glyph_error:
            footer.append((state.glyph_error, curses.color_pair(CP_ERROR)))
        elif glyph is not None:
            footer.append((glyph_detail(glyph), curses.A_BOLD))
        elif state.selected_font() is not None:
            footer.append(("(no glyphs)", curses.color_pair(CP_WARNING)))
        self.glyph_panel.draw(
            stdscr,
            state.glyphs.items,
            state.glyphs.selected_index,
            label=glyph_label,
            footer=footer,
        )

        self._draw_status_bar(state, max_y, max_x)
        stdscr.refresh()


@contextmanager
def terminal_session() -> Iterator[CursesTerminal]:
    """Take over the terminal for the duration of the ``with`` block.

    Switches to the alternate screen in raw, no-echo mode and restores the
    original mode on every exit path, including exceptions.
    """
    stdscr = curses.initscr()
    try:
        curses.noecho()
        curses.raw()
        yield CursesTerminal(stdscr)
    finally:
        stdscr.keypad(False)
        curses.noraw()
        curses.echo()
        curses.endwin()
