"""Fixed-size bitset stored as 32-bit words, with word-level bit helpers."""

from __future__ import annotations

import operator
import threading
from collections.abc import MutableSequence, Sequence

__all__ = [
    "WORD_WIDTH",
    "bit_test",
    "bit_test_and_set",
    "bit_test_and_reset",
    "atomic_bit_test_and_set",
    "atomic_bit_test_and_reset",
    "Bitset",
]

WORD_WIDTH = 32
_WORD_MASK = (1 << WORD_WIDTH) - 1

_atomic_lock = threading.Lock()


def _locate(offset: int) -> tuple[int, int]:
    offset = operator.index(offset)
    if offset < 0:
        raise IndexError(f"Bit offset must not be negative, got {offset}")
    return divmod(offset, WORD_WIDTH)


def bit_test(words: Sequence[int], offset: int) -> bool:
    """Return the bit at ``offset`` counted across consecutive 32-bit words."""
    word_i, bit_i = _locate(offset)
    return bool((words[word_i] >> bit_i) & 1)


def bit_test_and_set(words: MutableSequence[int], offset: int) -> bool:
    """Set the bit at ``offset`` and return its previous value."""
    word_i, bit_i = _locate(offset)
    word = words[word_i]
    words[word_i] = (word | (1 << bit_i)) & _WORD_MASK
    return bool((word >> bit_i) & 1)


def bit_test_and_reset(words: MutableSequence[int], offset: int) -> bool:
    """Clear the bit at ``offset`` and return its previous value."""
    word_i, bit_i = _locate(offset)
    word = words[word_i]
    words[word_i] = word & ~(1 << bit_i) & _WORD_MASK
    return bool((word >> bit_i) & 1)


def atomic_bit_test_and_set(words: MutableSequence[int], offset: int) -> bool:
    """Thread-safe variant of :func:`bit_test_and_set`."""
    with _atomic_lock:
        return bit_test_and_set(words, offset)


def atomic_bit_test_and_reset(words: MutableSequence[int], offset: int) -> bool:
    """Thread-safe variant of :func:`bit_test_and_reset`."""
    with _atomic_lock:
        return bit_test_and_reset(words, offset)


def _words_for(bits: int) -> int:
    return -(-bits // WORD_WIDTH)


class Bitset:
    """A fixed number of bits that keeps a running count of the bits set."""

    __slots__ = ("_size", "_words", "_count")

    def __init__(self, size: int) -> None:
        size = operator.index(size)
        if size <= 0:
            raise ValueError("Size must be greater than zero")
        self._size = size
        self._words = [0] * _words_for(size)
        self._count = 0

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> bool:
        return self.test(index)

    def __repr__(self) -> str:
        return f"Bitset(size={self._size}, count={self._count})"

    def _check(self, index: int) -> int:
        index = operator.index(index)
        if not 0 <= index < self._size:
            raise IndexError(
                f"Index {index} is out of range for bitset with size {self._size}"
            )
        return index

    def set(self, index: int) -> bool:
        """Set a bit; return its previous value."""
        old = bit_test_and_set(self._words, self._check(index))
        if not old:
            self._count += 1
        return old

    def reset(self, index: int) -> bool:
        """Clear a bit; return its previous value."""
        old = bit_test_and_reset(self._words, self._check(index))
        if old:
            self._count -= 1
        return old

    def update(self, index: int, value: bool) -> bool:
        """Set or clear a bit according to ``value``; return its previous value."""
        return self.set(index) if value else self.reset(index)

    def set_all(self) -> None:
        self._words = [_WORD_MASK] * len(self._words)
        self._count = self._size

    def reset_all(self) -> None:
        self._words = [0] * len(self._words)
        self._count = 0

    def test(self, index: int) -> bool:
        return bit_test(self._words, self._check(index))

    def count(self) -> int:
        return self._count

    def any(self) -> bool:
        return self._count > 0

    def all(self) -> bool:
        return self._count == self._size

    def none(self) -> bool:
        return self._count == 0

    def copy_from(self, other: Bitset) -> None:
        """Copy the words both bitsets have in common from ``other``."""
        if not isinstance(other, Bitset):
            raise TypeError("Source must be a Bitset")
        shared = min(len(self._words), len(other._words))
        self._words[:shared] = other._words[:shared]
        self._count = self._recount()

    def _recount(self) -> int:
        full, tail = divmod(self._size, WORD_WIDTH)
        total = sum(bin(word).count("1") for word in self._words[:full])
        if tail:
            total += bin(self._words[full] & ((1 << tail) - 1)).count("1")
        return total

    def to_words(self) -> list[int]:
        """Return a copy of the underlying 32-bit words."""
        return list(self._words)