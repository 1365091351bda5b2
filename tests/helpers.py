from pathlib import Path
from types import SimpleNamespace


def make_otfinfo_output(
    *,
    glyphs: list[tuple[int, int, str]] | None = None,
    extra_lines: list[str] | None = None,
    stdout: bytes | None = None,
    stderr: bytes = b"",
    returncode: int = 0,
):
    """
    Factory helper for mocking ``otfinfo -u`` output.

    Returns an object compatible with the result of run_command(), exposing
    'stdout', 'stderr' and 'returncode' attributes (bytes streams).
    """
    if stdout is None:
        lines: list[str] = list(extra_lines or [])
        for cp, gid, name in glyphs or []:
            lines.append(f"uni{cp:04X} {gid} {name}")
        stdout = ("\n".join(lines) + "\n").encode("utf-8")

    return SimpleNamespace(stdout=stdout, stderr=stderr, returncode=returncode)


def make_fake_extractor(fonts: dict[str, list] | None = None, failing: set[str] | None = None):
    """
    Build an extractor callable backed by a dict ``{font_name: records}``.

    Fonts listed in ``failing`` raise ProcessFailed. Each call is recorded in
    the returned extractor's ``calls`` list.
    """
    from glyphshow.extract_glyphs import ProcessFailed

    fonts = fonts or {}
    failing = failing or set()

    def extractor(path: Path, diagnostics: list):
        extractor.calls.append(Path(path))
        if Path(path).name in failing:
            raise ProcessFailed(["otfinfo", "-u", str(path)], 1, "bad font")
        return list(fonts.get(Path(path).name, []))

    extractor.calls = []
    return extractor


class ScriptedTerminal:
    """
    Terminal double for run_loop(): returns queued events from poll_event()
    and advances a FakeClock by the requested timeout when the queue holds
    ``None`` (no input before the timeout).
    """

    def __init__(self, events, clock=None):
        self.events = list(events)
        self.clock = clock
        self.paints = 0
        self.timeouts: list[float] = []
        self.painted_fonts: list = []

    def paint(self, state):
        self.paints += 1
        self.painted_fonts.append(state.fonts.selected_index)

    def poll_event(self, timeout):
        self.timeouts.append(timeout)
        if not self.events:
            raise AssertionError("run_loop polled past the end of the script")
        event = self.events.pop(0)
        if event is None and self.clock is not None:
            self.clock.advance(timeout)
        return event


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeScreen:
    """
    Recording stand-in for a curses window. Text written with addnstr() is
    kept by (row, col); writes outside the window raise curses.error like
    the real window does. Other calls are appended to ``calls``.
    """

    def __init__(self, rows: int, cols: int, keys=(), calls: list | None = None):
        self.rows = rows
        self.cols = cols
        self.keys = list(keys)
        self.calls = calls if calls is not None else []
        self.text: dict[tuple[int, int], tuple[str, int]] = {}

    def getmaxyx(self):
        return self.rows, self.cols

    def erase(self):
        self.calls.append("erase")
        self.text.clear()

    def refresh(self):
        self.calls.append("refresh")

    def keypad(self, flag):
        self.calls.append(("keypad", flag))

    def attron(self, attr):
        pass

    def attroff(self, attr):
        pass

    def addch(self, y, x, ch):
        pass

    def hline(self, y, x, ch, n):
        pass

    def addnstr(self, y, x, text, n, attr=0):
        import curses

        if y >= self.rows or x >= self.cols:
            raise curses.error("addnstr() returned ERR")
        self.text[(y, x)] = (text[:n], attr)

    def timeout(self, ms):
        self.calls.append(("timeout", ms))

    def getch(self):
        return self.keys.pop(0) if self.keys else -1

    def find(self, fragment: str):
        """Return ``(row, col, text, attr)`` of the first write containing ``fragment``."""
        for (row, col), (text, attr) in sorted(self.text.items()):
            if fragment in text:
                return row, col, text, attr
        return None
