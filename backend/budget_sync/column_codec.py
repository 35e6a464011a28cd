"""
Spreadsheet column label conversion.

Columns are addressed by zero-based index internally and by one or two
uppercase letters in the spreadsheet ("A".."Z", then "AA".."ZZ").
"""

from .errors import ColumnOutOfRangeError, InvalidColumnLabelError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASE = len(ALPHABET)
# First index that would need a third letter ("AAA")
MAX_COLUMN_INDEX = BASE * BASE + BASE


def encode(index: int) -> str:
    """
    Convert a zero-based column index to its letter label.

    Args:
        index: Column index, 0 for "A"

    Returns:
        One or two letter label

    Raises:
        ColumnOutOfRangeError: If the index is negative or needs three letters
    """
    if index < 0 or index >= MAX_COLUMN_INDEX:
        raise ColumnOutOfRangeError(
            f"Column index conversion exceeds maximum length: {index}"
        )

    label = ""

    magnitude = index // BASE
    if magnitude:
        label += ALPHABET[magnitude - 1]

    label += ALPHABET[index % BASE]
    return label


def decode(label: str) -> int:
    """
    Convert a one or two letter column label to its zero-based index.

    Raises:
        InvalidColumnLabelError: If the label is empty, longer than two
            letters, or holds characters outside A-Z
    """
    place_values = list(reversed(label))

    if not place_values or len(place_values) > 2:
        raise InvalidColumnLabelError(
            f"Index to column conversion exceeds maximum input: {label!r}"
        )

    for letter in place_values:
        if letter not in ALPHABET:
            raise InvalidColumnLabelError(f"Invalid column letter in label: {label!r}")

    index = ALPHABET.index(place_values[0])

    if len(place_values) == 2:
        index += (ALPHABET.index(place_values[1]) + 1) * BASE

    return index
