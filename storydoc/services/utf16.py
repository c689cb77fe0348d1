"""UTF-16 code unit helpers.

Paragraph offsets are produced by JavaScript editors, which index strings in
UTF-16 code units. Python indexes by code point, so anything outside the
Basic Multilingual Plane (emoji, ...) needs translating.
"""


def utf16_length(text: str) -> int:
    """Return the number of UTF-16 code units in a Python string.

    Characters with code point >= 0x10000 require a surrogate pair in
    UTF-16 and count as 2 code units.
    """
    return sum(2 if ord(character) >= 0x10000 else 1 for character in text)


def utf16_slice(text: str, start: int, end: int | None = None) -> str:
    """Slice ``text`` by UTF-16 code unit offsets.

    Works like ``text[start:end]`` for BMP-only text. An offset landing
    inside a surrogate pair yields a lone surrogate rather than failing.
    """
    if text.isascii():
        return text[start:end]
    encoded = text.encode("utf-16-le", "surrogatepass")
    stop = None if end is None else end * 2
    return encoded[start * 2:stop].decode("utf-16-le", "surrogatepass")
