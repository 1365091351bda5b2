"""
Glyphshow – discover_fonts.py
=============================

Build the ordered list of font files shown in the browser.

Sources, in order:

- explicit font file paths given on the command line (kept even if they do
  not exist: the browser then shows the extraction error);
- directories given on the command line, scanned recursively;
- optionally, fonts installed on the system as reported by FontConfig
  (``fc-list``).

Paths are made absolute and duplicates removed, keeping the first occurrence.
"""

from __future__ import annotations

import subprocess
from collections.abc import Iterable
from pathlib import Path

FONT_EXTENSIONS = {".ttf", ".otf", ".ttc", ".otc", ".woff", ".woff2"}


def run_command(argv: list[str]) -> subprocess.CompletedProcess[str]:
    """Run ``argv`` and return its decoded stdout with stderr interleaved."""
    return subprocess.run(
        argv, text=True, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, check=False
    )


def scan_font_dir(directory: Path) -> list[Path]:
    """Font files below ``directory``, sorted by path.

    Unreadable subdirectories are skipped.
    """
    found: set[Path] = set()
    try:
        for p in directory.rglob("*"):
            if p.suffix.lower() in FONT_EXTENSIONS and p.is_file():
                found.add(p)
    except OSError:
        pass
    return sorted(found)


def get_installed_font_files() -> list[Path]:
    """Font files known to FontConfig, resolved, sorted and unique.

    Runs ``fc-list --format=%{file}\\n``, which prints one absolute font file
    path per line. Blank lines and paths that no longer exist are dropped;
    a TrueType Collection appears once even though FontConfig lists each of
    its faces.

    Raises:
        RuntimeError: ``fc-list`` is missing or failed.
    """
    try:
        proc = run_command(["fc-list", "--format=%{file}\n"])
    except OSError as e:
        raise RuntimeError(f"fc-list not available: {e}") from e
    if proc.returncode != 0:
        raise RuntimeError(f"fc-list failed:\n{proc.stdout}")

    listed = (Path(line.strip()) for line in proc.stdout.splitlines() if line.strip())
    return sorted({p.resolve() for p in listed if p.exists()})


def collect_font_paths(inputs: Iterable[Path], use_fc_list: bool = False) -> list[Path]:
    """Resolve command line inputs into the ordered font list.

    Args:
        inputs: Font files and/or directories.
        use_fc_list: Append the fonts installed on the system.

    Returns:
        Absolute font file paths, unique, in input order (directory contents
        sorted).
    """
    paths: list[Path] = []
    for item in inputs:
        if item.is_dir():
            paths.extend(scan_font_dir(item))
        else:
            paths.append(item)

    if use_fc_list:
        paths.extend(get_installed_font_files())

    # resolved, so a relative path and its fc-list form collapse into one entry
    return list(dict.fromkeys(p.resolve() for p in paths))
