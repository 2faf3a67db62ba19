import re
from collections import Counter
from typing import Iterator, List, Tuple

# Characters that become a single space, and digits that are dropped entirely.
_SEPARATORS = re.compile(r'[\n,#/\\.!?:;\-\'"_*]')
_DIGITS = re.compile(r'[0-9]')

# Lone surrogates produced by 'surrogateescape' mark bytes that did not decode.
_ESCAPED_BYTE_MIN = '\udc80'
_ESCAPED_BYTE_MAX = '\udcff'


def normalize_text(text: str) -> str:
    """
    Prepares text for n-gram analysis.

    Punctuation and newlines are replaced by a space, ASCII digits are
    removed, and then every pair of spaces is folded into one. That last
    step is a single pass, so a run of three spaces comes out as two.

    Args:
        text: The raw input string.

    Returns:
        The cleaned text. It may still start or end with a space.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected text to be a str, got {type(text).__name__}.")

    text = _SEPARATORS.sub(' ', text)
    text = _DIGITS.sub('', text)
    return text.replace('  ', ' ')


def tokenize(text: str) -> List[str]:
    """Splits normalized text on single spaces, keeping empty tokens."""
    return text.split(' ')


def _decode(data: bytes) -> str:
    # Each undecodable byte becomes exactly one (escaped) character.
    return data.decode('utf-8', errors='surrogateescape')


def _ends_on_whole_rune(decoded: str) -> bool:
    return bool(decoded) and not (_ESCAPED_BYTE_MIN <= decoded[-1] <= _ESCAPED_BYTE_MAX)


def rune_to_byte_offset(data: bytes, offset: int) -> int:
    """
    Returns the byte offset at which `offset` runes of UTF-8 `data` have been consumed.

    Offsets that are negative or not smaller than the rune count saturate to
    `len(data)`. Prefixes that end on a broken byte sequence never count as
    a match, so scanning carries on past them.

    Args:
        data: UTF-8 encoded bytes, possibly malformed.
        offset: The number of runes to skip.

    Returns:
        A byte offset between 0 and len(data).
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"Expected bytes, got {type(data).__name__}.")

    if offset < 0 or len(_decode(data)) <= offset:
        return len(data)
    if offset == 0:
        return 0

    # A rune is at least one byte, so the target can't be reached before `offset`.
    for i in range(offset, len(data)):
        prefix = _decode(data[:i])
        if _ends_on_whole_rune(prefix) and len(prefix) == offset:
            return i

    return len(data)


def rune_offset_table(token: str) -> List[int]:
    """
    Maps every rune index of `token` to its UTF-8 byte offset.

    The table has one more entry than the token has runes; the last entry
    is the total byte length.
    """
    offsets = [0]
    for char in token:
        offsets.append(offsets[-1] + len(char.encode('utf-8', errors='surrogatepass')))
    return offsets


def pad_token(token: str) -> Tuple[bytes, List[int]]:
    """
    Pads `token` when its first character is a single byte in UTF-8 and encodes it once.

    Returns:
        The (possibly padded) UTF-8 bytes and their rune offset table.
    """
    encoded = token.encode('utf-8', errors='surrogatepass')

    # Pad only when the second rune starts at byte 1.
    if rune_to_byte_offset(encoded, 1) == 1:
        token = f" {token} "
        encoded = token.encode('utf-8', errors='surrogatepass')

    return encoded, rune_offset_table(token)


def _windows(encoded: bytes, offsets: List[int], n: int) -> Iterator[str]:
    rune_len = len(offsets) - 1
    byte_len = len(encoded)

    for p in range(rune_len - n + 1):
        start, end = offsets[p], offsets[p + n]
        if start == end or end > byte_len:
            break

        gram = encoded[start:end].decode('utf-8', errors='surrogatepass')
        if gram == ' ':
            continue
        yield gram


def generate_ngrams(token: str, n: int) -> Iterator[str]:
    """
    Yields every n-gram of a single token, never splitting a multi-byte character.

    The token is padded with a space on each side only when its first
    character is a single byte in UTF-8. Grams made of a lone space are
    skipped.

    Args:
        token: One word from the tokenizer.
        n: The gram length, in runes.
    """
    encoded, offsets = pad_token(token)
    return _windows(encoded, offsets, n)


def analyse_token(occurrences: Counter, token: str, depth: int) -> None:
    """
    Counts the grams of length 1 through depth+1 of `token` into `occurrences`.

    Empty tokens are ignored, and so is any depth below zero.
    """
    if not token:
        return
    encoded, offsets = pad_token(token)
    for n in range(1, depth + 2):
        occurrences.update(_windows(encoded, offsets, n))
