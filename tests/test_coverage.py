from glyphshow.coverage import (
    char_name,
    compute_unicode_blocks,
    printable_char,
    unicode_block,
)


def test_unicode_block_lookup():
    assert unicode_block(0x41) == "Basic Latin"
    assert unicode_block(0x3B1) == "Greek and Coptic"
    assert unicode_block(0xE0A0) == "Private Use Area"
    assert unicode_block(0x1F600) == "Emoticons"
    assert unicode_block(0x0E01) == "Other"


def test_compute_unicode_blocks_counts_in_table_order():
    blocks = compute_unicode_blocks([0x0E01, 0x3B1, 0x41, 0x42, 0xE0A0])

    assert blocks == {
        "Basic Latin": 2,
        "Greek and Coptic": 1,
        "Private Use Area": 1,
        "Other": 1,
    }
    assert list(blocks) == ["Basic Latin", "Greek and Coptic", "Private Use Area", "Other"]


def test_compute_unicode_blocks_empty():
    assert compute_unicode_blocks([]) == {}


def test_char_name():
    assert char_name(0x41) == "LATIN CAPITAL LETTER A"
    assert char_name(0xE0A0) == ""


def test_printable_char():
    assert printable_char(0x41) == "A"
    assert printable_char(0x20) == " "
    assert printable_char(0xE0A0) == "\ue0a0"
    assert printable_char(0x07) == "·"
    assert printable_char(0x0301) == "·"
    assert printable_char(0x200B) == "·"
