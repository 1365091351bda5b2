"""Unicode block lookup and coverage summaries for extracted glyphs."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

# (name, first, last), inclusive. Not exhaustive: only blocks commonly found
# in text and icon fonts.
UNICODE_BLOCKS = [
    ("Basic Latin", 0x0000, 0x007F),
    ("Latin-1 Supplement", 0x0080, 0x00FF),
    ("Latin Extended-A", 0x0100, 0x017F),
    ("Latin Extended-B", 0x0180, 0x024F),
    ("IPA Extensions", 0x0250, 0x02AF),
    ("Spacing Modifier Letters", 0x02B0, 0x02FF),
    ("Combining Diacritical Marks", 0x0300, 0x036F),
    ("Greek and Coptic", 0x0370, 0x03FF),
    ("Cyrillic", 0x0400, 0x04FF),
    ("Hebrew", 0x0590, 0x05FF),
    ("Arabic", 0x0600, 0x06FF),
    ("Devanagari", 0x0900, 0x097F),
    ("Latin Extended Additional", 0x1E00, 0x1EFF),
    ("Greek Extended", 0x1F00, 0x1FFF),
    ("General Punctuation", 0x2000, 0x206F),
    ("Currency Symbols", 0x20A0, 0x20CF),
    ("Letterlike Symbols", 0x2100, 0x214F),
    ("Arrows", 0x2190, 0x21FF),
    ("Mathematical Operators", 0x2200, 0x22FF),
    ("Miscellaneous Technical", 0x2300, 0x23FF),
    ("Box Drawing", 0x2500, 0x257F),
    ("Block Elements", 0x2580, 0x259F),
    ("Geometric Shapes", 0x25A0, 0x25FF),
    ("Miscellaneous Symbols", 0x2600, 0x26FF),
    ("Dingbats", 0x2700, 0x27BF),
    ("Braille Patterns", 0x2800, 0x28FF),
    # --- CJK ---
    ("Hiragana", 0x3040, 0x309F),
    ("Katakana", 0x30A0, 0x30FF),
    ("CJK Unified Ideographs Extension A", 0x3400, 0x4DBF),
    ("CJK Unified Ideographs", 0x4E00, 0x9FFF),
    ("Hangul Syllables", 0xAC00, 0xD7AF),
    # --- Icon fonts (Nerd Fonts, Powerline) live here ---
    ("Private Use Area", 0xE000, 0xF8FF),
    ("Alphabetic Presentation Forms", 0xFB00, 0xFB4F),
    ("Specials", 0xFFF0, 0xFFFF),
    # --- Emoji / symbols ---
    ("Miscellaneous Symbols and Pictographs", 0x1F300, 0x1F5FF),
    ("Emoticons", 0x1F600, 0x1F64F),
    ("Supplementary Private Use Area-A", 0xF0000, 0xFFFFF),
    ("Supplementary Private Use Area-B", 0x100000, 0x10FFFF),
]

OTHER_BLOCK = "Other"


def unicode_block(codepoint: int) -> str:
    """Return the name of the block containing ``codepoint``."""
    for name, start, end in UNICODE_BLOCKS:
        if start <= codepoint <= end:
            return name
    return OTHER_BLOCK


def compute_unicode_blocks(codepoints: Iterable[int]) -> dict[str, int]:
    """Count how many code points fall into each known Unicode block.

    Code points outside :data:`UNICODE_BLOCKS` are counted under ``"Other"``.

    Args:
        codepoints: Code points present in the font.

    Returns:
        Mapping ``{block_name: count}`` with only non-zero counts, in
        block table order (``"Other"`` last).
    """
    counts: dict[str, int] = {}
    for cp in codepoints:
        block = unicode_block(cp)
        counts[block] = counts.get(block, 0) + 1

    order = [name for name, _, _ in UNICODE_BLOCKS] + [OTHER_BLOCK]
    return {name: counts[name] for name in order if name in counts}


def char_name(codepoint: int) -> str:
    """Official Unicode character name, or ``""`` when it has none."""
    return unicodedata.name(chr(codepoint), "")


def printable_char(codepoint: int) -> str:
    """Return the character itself, or a placeholder when it cannot be shown.

    Control, format, unassigned, separator and combining characters would
    corrupt a terminal line, so they are replaced by ``"·"``. Private use
    characters are kept: icon fonts put their glyphs there.
    """
    ch = chr(codepoint)
    category = unicodedata.category(ch)
    if category in ("Cc", "Cf", "Cn", "Zl", "Zp", "Mn", "Me"):
        return "·"
    return ch
