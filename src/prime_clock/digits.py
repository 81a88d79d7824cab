from enum import Enum
from typing import Sequence, Tuple

ASCII_ZERO = ord("0")
TERMINATOR = 0
HIST_BUCKETS = 9


class IntegerWidth(Enum):
    """Supported candidate widths. U32 is the reference width."""

    U32 = 32
    U64 = 64

    @property
    def bits(self) -> int:
        return self.value

    @property
    def max_value(self) -> int:
        return (1 << self.value) - 1

    @property
    def max_digits(self) -> int:
        """Decimal digits needed for the largest value of this width."""
        return len(str(self.max_value))

    @classmethod
    def from_bits(cls, bits: int) -> "IntegerWidth":
        for width in cls:
            if width.value == bits:
                return width
        raise ValueError(f"Unsupported integer width: {bits}")


class DecimalBuffer:
    """Fixed-capacity, NUL-terminated decimal storage.

    Digits are written right-justified so that the string view always ends at
    the terminator and starts wherever the most significant digit landed.
    """

    def __init__(self, width: IntegerWidth = IntegerWidth.U32, capacity: int | None = None) -> None:
        self.width = width
        if capacity is None:
            capacity = width.max_digits + 1
        self.data = bytearray(capacity)
        self.start = len(self.data) - 1 if self.data else 0

    @property
    def capacity(self) -> int:
        return len(self.data)

    def view(self) -> str:
        """The digits currently held, without the terminator."""
        return self.data[self.start:-1].decode("ascii")


def encode(value: int, buffer: DecimalBuffer) -> str:
    """Write the minimal decimal form of value into buffer and return it."""
    assert buffer.capacity >= buffer.width.max_digits + 1, \
        f"buffer capacity {buffer.capacity} < {buffer.width.max_digits + 1} for {buffer.width.name}"
    assert 0 <= value <= buffer.width.max_value, \
        f"{value} out of range for {buffer.width.name}"

    data = buffer.data
    pos = len(data) - 1
    data[pos] = TERMINATOR
    while True:
        pos -= 1
        data[pos] = ASCII_ZERO + value % 10
        value //= 10
        if value == 0:
            break
    buffer.start = pos
    return buffer.view()


def is_palindrome(decimal: str) -> bool:
    i, j = 0, len(decimal) - 1
    while i < j:
        if decimal[i] != decimal[j]:
            return False
        i += 1
        j -= 1
    return True


def first_digit(decimal: str) -> int:
    return ord(decimal[0]) - ASCII_ZERO


def last_digit(decimal: str) -> int:
    return ord(decimal[-1]) - ASCII_ZERO


def digit_distribution(hist: Sequence[int]) -> Tuple[float, ...]:
    """Normalize histogram counts to fractions of the total."""
    total = sum(hist)
    if total == 0:
        return tuple(0.0 for _ in hist)
    return tuple(count / total for count in hist)
