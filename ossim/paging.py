"""Paged address translation and a small word-addressed memory."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import takewhile

PAGE_TABLE = (11, 23, 5)
PAGE_SIZE = 10
_WORD = 4
_OUTPUT_WORDS = 10


def translate_address(
    virtual_address: int,
    page_table: Sequence[int] = PAGE_TABLE,
    page_size: int = PAGE_SIZE,
) -> int:
    """Map a virtual address to a real one through the page table.

    Page and offset come from division truncated toward zero, so a small
    negative address stays on page 0 with a negative offset.
    """
    if page_size < 1:
        raise ValueError(f"page size must be positive, got {page_size}")
    page = abs(virtual_address) // page_size
    if virtual_address < 0:
        page = -page
    offset = virtual_address - page * page_size
    if not 0 <= page < len(page_table):
        raise ValueError(
            f"invalid virtual address {virtual_address}: page {page} out of bounds"
        )
    return page_table[page] * page_size + offset


class PagedMemory:
    """Word-addressed memory that holds a message and its page table."""

    def __init__(
        self,
        words: int = 400,
        page_table: Sequence[int] = PAGE_TABLE,
        page_size: int = PAGE_SIZE,
    ) -> None:
        self._memory = [[" "] * _WORD for _ in range(words)]
        self.page_table = tuple(page_table)
        self.page_size = page_size

    @property
    def memory(self) -> tuple[str, ...]:
        return tuple("".join(word) for word in self._memory)

    def translate(self, virtual_address: int) -> int:
        """Translate an address with this memory's page table."""
        return translate_address(virtual_address, self.page_table, self.page_size)

    def store_message(self, message: str = "WELCOME") -> None:
        """Store the message from address 0, followed by a NUL terminator."""
        text = message + "\0"
        if len(text) > len(self._memory) * _WORD:
            raise ValueError("message does not fit in memory")
        for position, char in enumerate(text):
            word, offset = divmod(position, _WORD)
            self._memory[word][offset] = char

    def output(self) -> str:
        """Return the first ten words, each cut at its first NUL."""
        return "".join(
            "".join(takewhile(lambda char: char != "\0", word))
            for word in self._memory[:_OUTPUT_WORDS]
        )