from utils.text_utils import utf16_length, utf16_offset_to_index


def test_utf16_length():
    assert utf16_length("abc") == 3
    assert utf16_length("😀a") == 3
    assert utf16_length("") == 0


def test_utf16_offset_to_index():
    text = "😀 bold"
    assert utf16_offset_to_index(text, 0) == 0
    assert utf16_offset_to_index(text, 2) == 1
    assert utf16_offset_to_index(text, 3) == 2
    assert utf16_offset_to_index(text, 7) == 6
    assert utf16_offset_to_index(text, 100) == len(text)
