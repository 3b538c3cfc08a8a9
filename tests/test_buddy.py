import pytest

from ossim.buddy import (
    AllocationError,
    BuddyAllocator,
    ProcessNotFound,
    next_power_of_two,
)


def _find(allocator, name):
    return next(block for block in allocator.root if block.name == name)


@pytest.mark.parametrize("n", [1, 2, 3, 5, 100, 511, 512, 513, 1000])
def test_next_power_of_two_is_smallest_power_at_least_n(n):
    p = next_power_of_two(n)
    assert p >= n
    assert p & (p - 1) == 0
    assert p == 1 or p // 2 < n


@pytest.mark.parametrize("n", [1, 2, 64, 1024])
def test_powers_of_two_map_to_themselves(n):
    assert next_power_of_two(n) == n


@pytest.mark.parametrize("n", [0, -5])
def test_non_positive_rounds_up_to_one(n):
    assert next_power_of_two(n) == 1


def test_allocation_uses_smallest_fitting_block():
    allocator = BuddyAllocator()
    block = allocator.allocate("A", 100)
    assert block.size == next_power_of_two(100)
    assert block.is_leaf
    assert block.fragmentation == block.size - 100
    assert _find(allocator, "A") is block


def test_whole_memory_allocation_takes_root():
    allocator = BuddyAllocator()
    block = allocator.allocate("A", 1024)
    assert block is allocator.root
    assert allocator.render() == "1024 (A, Frag: 0)"


def test_request_larger_than_memory_fails():
    allocator = BuddyAllocator()
    with pytest.raises(AllocationError):
        allocator.allocate("A", 1025)


def test_full_memory_rejects_further_requests():
    allocator = BuddyAllocator()
    allocator.allocate("A", 1024)
    with pytest.raises(AllocationError):
        allocator.allocate("B", 1)


def test_render_after_split():
    allocator = BuddyAllocator()
    allocator.allocate("A", 512)
    assert allocator.render() == "1024\n  512 (A, Frag: 0)\n  512"
    assert allocator.render(indent=" ") == "1024\n 512 (A, Frag: 0)\n 512"


def test_freeing_everything_merges_back_to_root():
    allocator = BuddyAllocator()
    allocator.allocate("A", 100)
    allocator.allocate("B", 200)
    allocator.deallocate("A")
    allocator.deallocate("B")
    assert allocator.root.is_leaf
    assert allocator.root.is_free
    assert allocator.render() == "1024"


def test_freeing_one_keeps_other_allocated():
    allocator = BuddyAllocator()
    allocator.allocate("A", 100)
    allocator.allocate("B", 200)
    allocator.deallocate("A")
    assert not allocator.root.is_leaf
    assert _find(allocator, "B").process_size == 200
    assert all(block.name != "A" for block in allocator.root)


def test_deallocate_unknown_process_raises():
    allocator = BuddyAllocator()
    allocator.allocate("A", 10)
    with pytest.raises(ProcessNotFound):
        allocator.deallocate("Z")
    with pytest.raises(KeyError):
        allocator.deallocate("Z")


def test_deallocate_twice_raises():
    allocator = BuddyAllocator()
    allocator.allocate("A", 10)
    allocator.deallocate("A")
    with pytest.raises(ProcessNotFound):
        allocator.deallocate("A")


def test_leaf_mode_blocks_never_overlap():
    allocator = BuddyAllocator()
    requests = dict(zip("ABCDEF", [100, 30, 250, 64, 7, 120]))
    for name, size in requests.items():
        allocator.allocate(name, size)
    allocated = [block for block in allocator.root if not block.is_free]
    assert sorted(block.name for block in allocated) == sorted(requests)
    for block in allocated:
        assert block.is_leaf
        assert block.size == next_power_of_two(requests[block.name])
    assert sum(block.size for block in allocated) <= allocator.root.size


def test_leaf_mode_skips_split_blocks():
    allocator = BuddyAllocator()
    allocator.allocate("A", 100)
    block = allocator.allocate("B", 512)
    assert block.is_leaf
    assert not any(inner.name == "A" for inner in block)


def test_non_leaf_mode_reuses_split_block():
    allocator = BuddyAllocator(require_leaf=False)
    allocator.allocate("A", 100)
    block = allocator.allocate("B", 512)
    assert not block.is_leaf
    assert any(inner.name == "A" for inner in block)


def test_memory_reusable_after_free():
    allocator = BuddyAllocator()
    allocator.allocate("A", 1024)
    allocator.deallocate("A")
    assert allocator.allocate("B", 1024) is allocator.root
    assert allocator.root.name == "B"


@pytest.mark.parametrize("size", [1000, 0, -4])
def test_memory_size_must_be_power_of_two(size):
    with pytest.raises(ValueError):
        BuddyAllocator(size)