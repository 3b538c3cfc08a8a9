import pytest

from ossim.paging import PAGE_TABLE, PAGE_SIZE, PagedMemory, translate_address


def test_translate_example_address():
    assert translate_address(12) == 232


def test_translate_small_negative_stays_on_first_page():
    assert translate_address(-5) == 105


def test_translate_keeps_offset_within_page():
    for address in range(PAGE_SIZE * len(PAGE_TABLE)):
        real = translate_address(address)
        assert real % PAGE_SIZE == address % PAGE_SIZE
        assert real // PAGE_SIZE in PAGE_TABLE


def test_identity_page_table_maps_to_itself():
    for address in range(30):
        assert translate_address(address, (0, 1, 2), 10) == address


@pytest.mark.parametrize("address", [30, 100, -15])
def test_translate_rejects_pages_outside_table(address):
    with pytest.raises(ValueError):
        translate_address(address)


def test_translate_rejects_bad_page_size():
    with pytest.raises(ValueError):
        translate_address(3, (1,), 0)


def test_memory_translate_uses_own_table():
    memory = PagedMemory(page_table=(0, 1, 2), page_size=10)
    assert memory.translate(17) == 17
    with pytest.raises(ValueError):
        memory.translate(30)


def test_welcome_message_output():
    memory = PagedMemory()
    memory.store_message()
    out = memory.output()
    assert out.startswith("WELCOME")
    assert set(out[len("WELCOME"):]) == {" "}
    assert memory.memory[0] == "WELC"
    assert memory.memory[1] == "OME\0"


def test_message_of_whole_words_round_trips():
    memory = PagedMemory()
    memory.store_message("ABCDEFGH")
    out = memory.output()
    assert out.startswith("ABCDEFGH")
    assert "\0" not in out
    assert out.strip(" ") == "ABCDEFGH"


def test_output_reads_only_first_ten_words():
    memory = PagedMemory()
    memory.store_message("X" * 45)
    assert memory.output() == "X" * 40


def test_message_too_large_is_rejected():
    memory = PagedMemory(words=2)
    with pytest.raises(ValueError):
        memory.store_message("ABCDEFGH")