def utf16_length(text: str) -> int:
    return len((text or "").encode("utf-16-le")) // 2


def utf16_offset_to_index(text: str, offset: int) -> int:
    """Convert a UTF-16 code unit offset (as Telegram sends it) to a str index."""
    if offset <= 0:
        return 0
    units = 0
    for index, char in enumerate(text):
        units += 2 if ord(char) > 0xFFFF else 1
        if units >= offset:
            return index + 1
    return len(text)
