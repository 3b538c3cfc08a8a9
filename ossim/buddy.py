"""Binary buddy memory allocation over a tree of power-of-two blocks."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

_UNNAMED = "-"


class BuddyError(Exception):
    """Base class for buddy allocator errors."""


class AllocationError(BuddyError):
    """No free block can hold the requested size."""


class ProcessNotFound(BuddyError, KeyError):
    """No allocated block belongs to the named process."""


def next_power_of_two(n: int) -> int:
    """Return the smallest power of two that is at least ``n`` (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


@dataclass(eq=False)
class Block:
    """A block of memory, possibly split into two halves."""

    size: int
    name: str | None = None
    process_size: int = 0
    left: Block | None = None
    right: Block | None = None

    @property
    def is_free(self) -> bool:
        return self.name is None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def fragmentation(self) -> int:
        """Unused space inside an allocated block; 0 for a free block."""
        if self.is_free:
            return 0
        return self.size - self.process_size

    def __iter__(self) -> Iterator[Block]:
        """Walk this block and its descendants in pre-order."""
        yield self
        if self.left is not None:
            yield from self.left
        if self.right is not None:
            yield from self.right

    def _release(self) -> None:
        self.name = None
        self.process_size = 0

    def _split(self) -> None:
        half = self.size // 2
        self.left = Block(half)
        self.right = Block(half)


class BuddyAllocator:
    """Allocate named processes from a block tree rooted at ``size`` units.

    With ``require_leaf`` a block is only handed out while it is unsplit;
    without it a free block of the right size is taken even if it has
    already been split into smaller blocks.
    """

    def __init__(self, size: int = 1024, require_leaf: bool = True) -> None:
        if size < 1 or size & (size - 1):
            raise ValueError(f"memory size must be a power of two, got {size}")
        self.root = Block(size)
        self.require_leaf = require_leaf

    def allocate(self, name: str, size: int) -> Block:
        """Place a process and return the block it was given."""
        block = self._allocate(self.root, name, size)
        if block is None:
            raise AllocationError(
                f"could not allocate memory for process {name} of size {size}"
            )
        return block

    def _allocate(self, block: Block, name: str, size: int) -> Block | None:
        if not block.is_free or block.size < size:
            return None
        if block.size == next_power_of_two(size) and (
            block.is_leaf or not self.require_leaf
        ):
            block.name = name
            block.process_size = size
            return block
        if block.is_leaf:
            block._split()
        return self._allocate(block.left, name, size) or self._allocate(
            block.right, name, size
        )

    def deallocate(self, name: str) -> None:
        """Free the first block held by ``name``, merging free buddies."""
        if not self._deallocate(self.root, name):
            raise ProcessNotFound(name)

    def _deallocate(self, block: Block | None, name: str) -> bool:
        if block is None:
            return False
        if not block.is_free and block.name == name:
            block._release()
            return True
        found = self._deallocate(block.left, name) or self._deallocate(
            block.right, name
        )
        if found:
            self._try_merge(block)
        return found

    @staticmethod
    def _try_merge(block: Block) -> None:
        left, right = block.left, block.right
        if left is None or right is None:
            return
        if left.is_free and right.is_free and left.left is None and right.right is None:
            block.left = None
            block.right = None
            block._release()

    def render(self, indent: str = "  ") -> str:
        """Draw the tree, one block per line, children indented under parents."""
        lines: list[str] = []
        self._render(self.root, 0, indent, lines)
        return "\n".join(lines)

    def _render(
        self, block: Block | None, level: int, indent: str, lines: list[str]
    ) -> None:
        if block is None:
            return
        line = f"{indent * level}{block.size}"
        if not block.is_free and block.name != _UNNAMED:
            line += f" ({block.name}, Frag: {block.fragmentation})"
        lines.append(line)
        self._render(block.left, level + 1, indent, lines)
        self._render(block.right, level + 1, indent, lines)