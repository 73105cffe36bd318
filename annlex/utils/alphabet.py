from __future__ import annotations

ALPHABET = "abcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)

_DIGITS = {ch: i for i, ch in enumerate(ALPHABET)}


def label_width(bucket_count: int) -> int:
    """Smallest number of letters able to spell every label in [0, bucket_count)."""
    if bucket_count < 1:
        raise ValueError(f"bucket_count must be >= 1, got {bucket_count}")
    width = 1
    while BASE ** width < bucket_count:
        width += 1
    return width


def alphabetic_encode(value: int, width: int = 0) -> str:
    """
    Base-26 positional encoding with digits 'a'..'z' standing for 0..25.

    Without a width the result has minimal length (0 -> "a", 26 -> "ba").
    With a width it is left-padded with 'a' (the zero digit).
    """
    if value < 0:
        raise ValueError(f"cannot encode negative value {value}")
    letters = []
    while True:
        value, digit = divmod(value, BASE)
        letters.append(ALPHABET[digit])
        if value == 0:
            break
    if width and len(letters) > width:
        raise ValueError(f"value needs {len(letters)} letters, width is {width}")
    return "".join(reversed(letters)).rjust(width, ALPHABET[0])


def alphabetic_decode(label: str) -> int:
    if not label:
        raise ValueError("cannot decode an empty label")
    value = 0
    for ch in label:
        try:
            value = value * BASE + _DIGITS[ch]
        except KeyError:
            raise ValueError(f"invalid character {ch!r} in label {label!r}") from None
    return value
