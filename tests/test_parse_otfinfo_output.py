from glyphshow.extract_glyphs import (
    GlyphRecord,
    InvalidCodepoint,
    InvalidGlyphIndex,
    parse_otfinfo_output,
)


def test_parse_skips_non_glyph_lines():
    text = "uni0041 41 A\nsome other line\nuni0042 42 B\n"

    records = parse_otfinfo_output(text)

    assert records == [
        GlyphRecord(0x41, 41, "A"),
        GlyphRecord(0x42, 42, "B"),
    ]


def test_parse_empty_output():
    assert parse_otfinfo_output("") == []
    assert parse_otfinfo_output("no glyphs here\n\n") == []


def test_parse_keeps_file_order():
    text = "uni0062 3 b\nuni0061 2 a\nuni0063 4 c\n"

    records = parse_otfinfo_output(text)

    assert [r.name for r in records] == ["b", "a", "c"]


def test_parse_hyphenated_and_dotted_names():
    text = "uni2010 120 hyphen-two\nuni0041 36 A.sc\nuniFB01 300 f_i\n"

    records = parse_otfinfo_output(text)

    assert [r.name for r in records] == ["hyphen-two", "A.sc", "f_i"]


def test_parse_lowercase_hex_and_astral_plane():
    text = "uni1f600 900 grinning\nunie0a0 12 branch\n"

    records = parse_otfinfo_output(text)

    assert records[0].codepoint == 0x1F600
    assert records[0].char == "\U0001F600"
    assert records[1].code == "U+E0A0"


def test_parse_skips_codepoint_above_max():
    text = "uni0041 36 A\nuni110000 37 toobig\nuni0042 38 B\n"
    diagnostics = []

    records = parse_otfinfo_output(text, diagnostics)

    assert [r.name for r in records] == ["A", "B"]
    assert len(diagnostics) == 1
    assert isinstance(diagnostics[0], InvalidCodepoint)
    assert diagnostics[0].line_no == 2


def test_parse_skips_surrogates():
    text = "uniD800 5 hi\nuniDFFF 6 lo\nuni0043 7 C\n"
    diagnostics = []

    records = parse_otfinfo_output(text, diagnostics)

    assert records == [GlyphRecord(0x43, 7, "C")]
    assert all(isinstance(d, InvalidCodepoint) for d in diagnostics)
    assert len(diagnostics) == 2


def test_parse_skips_non_hex_codepoint():
    text = "uniZZZZ 5 junk\nuni0044 8 D\n"
    diagnostics = []

    records = parse_otfinfo_output(text, diagnostics)

    assert records == [GlyphRecord(0x44, 8, "D")]
    assert isinstance(diagnostics[0], InvalidCodepoint)


def test_parse_rejects_0x_prefixed_codepoint():
    text = "uni0x41 5 A\nuni0X42 6 B\nuni0043 7 C\n"
    diagnostics = []

    records = parse_otfinfo_output(text, diagnostics)

    assert records == [GlyphRecord(0x43, 7, "C")]
    assert [d.value for d in diagnostics] == ["0x41", "0X42"]
    assert all(isinstance(d, InvalidCodepoint) for d in diagnostics)


def test_parse_skips_codepoint_wider_than_32_bits():
    records = parse_otfinfo_output("uni1FFFFFFFF 1 huge\n")

    assert records == []


def test_parse_skips_invalid_glyph_index():
    text = "uni0041 4x A\nuni0042 38 B\n"
    diagnostics = []

    records = parse_otfinfo_output(text, diagnostics)

    assert records == [GlyphRecord(0x42, 38, "B")]
    assert len(diagnostics) == 1
    assert isinstance(diagnostics[0], InvalidGlyphIndex)
    assert diagnostics[0].value == "4x"


def test_parse_without_diagnostics_list_does_not_fail():
    records = parse_otfinfo_output("uniD800 1 x\nuni0041 zz A\n")

    assert records == []
