"""
Glyphshow – extract_glyphs.py
=============================

Extract the glyph records (code point, glyph index, glyph name) of a font.

Two backends are available:

- ``otfinfo`` (default): runs ``otfinfo -u <font>`` from LCDF Typetools and
  parses its text output.
- ``fonttools``: reads the best cmap of the font directly with fontTools.

Both return a list of :class:`GlyphRecord` in a stable order and raise an
:class:`ExtractionError` subclass when the whole extraction fails. Malformed
individual lines never abort an extraction: they are skipped and, when the
caller passes a ``diagnostics`` list, recorded there.
"""

from __future__ import annotations

import re
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path

# fontTools does not provide type stubs/py.typed
from fontTools.ttLib import TTFont  # type: ignore[import]

OTFINFO_COMMAND = "otfinfo"
BACKENDS = ("otfinfo", "fonttools")

MAX_CODEPOINT = 0x10FFFF
MAX_UINT32 = 0xFFFFFFFF
SURROGATE_RANGE = range(0xD800, 0xE000)

HEX_RE = re.compile(r"[0-9A-Fa-f]+")

#: One ``otfinfo -u`` record, e.g. ``uni0041 36 A``.
GLYPH_LINE_RE = re.compile(
    r"""
    \buni([0-9A-Za-z]+) # code point (hex)
    \s+
    ([0-9A-Za-z]+)      # glyph index (decimal)
    \s+
    ([0-9A-Za-z._-]+)   # glyph name
    """,
    re.VERBOSE,
)


# -----------------------
# Records
# -----------------------
@dataclass(frozen=True)
class GlyphRecord:
    """One glyph of a font as reported by the extraction backend."""

    codepoint: int
    glyph_index: int
    name: str

    @property
    def char(self) -> str:
        return chr(self.codepoint)

    @property
    def code(self) -> str:
        return f"U+{self.codepoint:04X}"


# -----------------------
# Errors
# -----------------------
class ExtractionError(RuntimeError):
    """Base class for glyph extraction failures."""


class ProcessFailed(ExtractionError):
    """The introspection command could not run or exited abnormally."""

    def __init__(self, argv: list[str], returncode: int | None, stderr: str = ""):
        self.argv = argv
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            msg = f"{argv[0]} failed: {stderr}"
        else:
            msg = f"{argv[0]} exited with status {returncode}"
            if stderr.strip():
                msg += f": {stderr.strip()}"
        super().__init__(msg)


class EncodingError(ExtractionError):
    """The command output is not valid UTF-8."""


class FontReadError(ExtractionError):
    """fontTools could not open or decode the font file."""


class InvalidCodepoint(ExtractionError):
    """A record's code point is not a Unicode scalar value."""

    def __init__(self, line_no: int, line: str, value: str):
        self.line_no = line_no
        self.line = line
        self.value = value
        super().__init__(f"line {line_no}: invalid code point {value!r}")


class InvalidGlyphIndex(ExtractionError):
    """A record's glyph index is not a base-10 non-negative integer."""

    def __init__(self, line_no: int, line: str, value: str):
        self.line_no = line_no
        self.line = line
        self.value = value
        super().__init__(f"line {line_no}: invalid glyph index {value!r}")


Extractor = Callable[[Path, list], list[GlyphRecord]]


# -----------------------
# Subprocess helper
# -----------------------
def run_command(
    argv: list[str], timeout: float | None = None
) -> subprocess.CompletedProcess[bytes]:
    return subprocess.run(
        argv,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        check=False,
        timeout=timeout,
    )


# -----------------------
# Parsing
# -----------------------
def to_scalar_value(value: int) -> int | None:
    """Return ``value`` if it is a Unicode scalar value, else ``None``."""
    if value < 0 or value > MAX_CODEPOINT or value in SURROGATE_RANGE:
        return None
    return value


def parse_otfinfo_output(
    text: str, diagnostics: list[ExtractionError] | None = None
) -> list[GlyphRecord]:
    """Parse the output of ``otfinfo -u`` into glyph records.

    Lines that do not look like a glyph record (headers, warnings, blank
    lines) are skipped silently. Lines that look like a record but carry an
    invalid code point or glyph index are skipped too, and the corresponding
    :class:`InvalidCodepoint` / :class:`InvalidGlyphIndex` is appended to
    ``diagnostics`` when a list is given.

    Args:
        text: Decoded standard output of ``otfinfo -u``.
        diagnostics: Optional list collecting per-record errors.

    Returns:
        The valid records, in input order. May be empty.
    """
    records: list[GlyphRecord] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        m = GLYPH_LINE_RE.search(line)
        if m is None:
            continue
        hex_field, index_field, name = m.groups()

        raw = int(hex_field, 16) if HEX_RE.fullmatch(hex_field) else None
        codepoint = None if raw is None or raw > MAX_UINT32 else to_scalar_value(raw)
        if codepoint is None:
            if diagnostics is not None:
                diagnostics.append(InvalidCodepoint(line_no, line, hex_field))
            continue

        if not index_field.isdigit():
            if diagnostics is not None:
                diagnostics.append(InvalidGlyphIndex(line_no, line, index_field))
            continue

        records.append(GlyphRecord(codepoint, int(index_field), name))
    return records


# -----------------------
# Backends
# -----------------------
def extract_glyphs(
    path: Path | str,
    *,
    command: str = OTFINFO_COMMAND,
    timeout: float | None = None,
    diagnostics: list[ExtractionError] | None = None,
) -> list[GlyphRecord]:
    """Extract glyph records by running ``otfinfo -u`` on a font file.

    Args:
        path: Font file to inspect.
        command: ``otfinfo`` executable name or path.
        timeout: Seconds to wait for the command, ``None`` to wait forever.
        diagnostics: Optional list collecting per-record errors.

    Returns:
        The glyph records in the order ``otfinfo`` printed them.

    Raises:
        ProcessFailed: The command could not be spawned, timed out or exited
            with a non-zero status.
        EncodingError: The command output is not valid UTF-8.
    """
    argv = [command, "-u", str(path)]
    try:
        proc = run_command(argv, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise ProcessFailed(argv, None, f"timed out after {timeout}s") from e
    except OSError as e:
        raise ProcessFailed(argv, None, str(e)) from e

    stderr = (proc.stderr or b"").decode("utf-8", errors="replace")
    if proc.returncode != 0:
        raise ProcessFailed(argv, proc.returncode, stderr)

    try:
        text = (proc.stdout or b"").decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"{command} output for {path} is not UTF-8: {e}") from e

    return parse_otfinfo_output(text, diagnostics)


def extract_glyphs_fonttools(
    path: Path | str,
    *,
    font_number: int = 0,
    diagnostics: list[ExtractionError] | None = None,
) -> list[GlyphRecord]:
    """Extract glyph records from the font's cmap using fontTools.

    Records are returned in code point order. ``font_number`` selects the
    face inside a TrueType Collection.

    Raises:
        FontReadError: fontTools could not open the font or decode its cmap.
    """
    try:
        tt = TTFont(str(path), fontNumber=font_number, lazy=True)
    except Exception as e:
        raise FontReadError(f"cannot open {path}: {e}") from e

    records: list[GlyphRecord] = []
    try:
        try:
            cmap = tt.getBestCmap() or {}
        except Exception as e:
            raise FontReadError(f"cannot read cmap of {path}: {e}") from e

        for cp in sorted(cmap):
            name = cmap[cp]
            if to_scalar_value(cp) is None:
                if diagnostics is not None:
                    diagnostics.append(InvalidCodepoint(0, name, f"{cp:X}"))
                continue
            records.append(GlyphRecord(cp, tt.getGlyphID(name), name))
    finally:
        tt.close()
    return records


def make_extractor(
    backend: str = "otfinfo",
    *,
    command: str = OTFINFO_COMMAND,
    timeout: float | None = None,
) -> Extractor:
    """Return a ``(path, diagnostics) -> records`` callable for ``backend``."""
    if backend == "otfinfo":
        fn = partial(extract_glyphs, command=command, timeout=timeout)
    elif backend == "fonttools":
        fn = extract_glyphs_fonttools
    else:
        raise ValueError(f"Unknown extraction backend: {backend!r}")

    def extractor(path: Path, diagnostics: list) -> list[GlyphRecord]:
        return fn(path, diagnostics=diagnostics)

    return extractor
