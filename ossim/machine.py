"""A card-driven virtual machine that loads and runs small job decks.

A deck is a sequence of cards (lines). ``$AMJ`` starts a job, program cards
are loaded into memory, ``$DTA`` starts execution (``GD`` instructions read
the following cards as data) and ``$END`` closes the job.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from enum import Enum

_WORD = 4
_CARD_WORDS = 10
_CARD_CHARS = _WORD * _CARD_WORDS
_LINE_LIMIT = 41
_BUFFER_SIZE = 200
_LOAD_CLEAR = 101
_READ_CLEAR = 41
_END_MARK = list("$END")

_CHECKED_OPCODES = frozenset({"GD", "PD", "LR", "SR", "CR", "BT"})
_INVALID_OPCODE = "Error: Invalid Opcode encountered. Terminating program.\n"
_INVALID_OPERAND = "Error: Invalid Operand encountered. Terminating program.\n"


class MachineError(Exception):
    """The program addressed memory outside the machine."""


class Dialect(Enum):
    """Instruction-set variants.

    ``CHECKED`` has 100 words and rejects bad opcodes and operands before
    executing; ``EXTENDED`` has 200 words and adds the ``NR`` instruction.
    """

    CHECKED = "checked"
    EXTENDED = "extended"

    @property
    def memory_words(self) -> int:
        return 100 if self is Dialect.CHECKED else 200

    @property
    def halt_message(self) -> str:
        if self is Dialect.CHECKED:
            return "Program Terminated Successfully.\n\n"
        return "Program Halted.\n"


class StopReason(Enum):
    """Why execution stopped."""

    HALTED = "halted"
    INVALID_OPCODE = "invalid opcode"
    INVALID_OPERAND = "invalid operand"
    INVALID_INSTRUCTION = "invalid instruction"


class Machine:
    """A word-addressed machine fed from a deck of input cards.

    Program output goes to :attr:`output`; status messages and memory dumps
    go to :attr:`console`.
    """

    def __init__(
        self, dialect: Dialect = Dialect.CHECKED, input_lines: Iterable[str] = ()
    ) -> None:
        self.dialect = Dialect(dialect)
        self._cards = deque(line.removesuffix("\n") for line in input_lines)
        self._buffer = [" "] * _BUFFER_SIZE
        self._memory = [[" "] * _WORD for _ in range(self.dialect.memory_words)]
        self._register = [" "] * _WORD
        self._instruction = [" "] * _WORD
        self.counter = 0
        self.toggle = False
        self._load_index = 0
        self._output: list[str] = []
        self.console: list[str] = []

    @property
    def output(self) -> str:
        return "".join(self._output)

    @property
    def register(self) -> str:
        return "".join(self._register)

    @property
    def memory(self) -> tuple[str, ...]:
        return tuple("".join(word) for word in self._memory)

    def run(self) -> str:
        """Process the whole deck and return everything the programs wrote."""
        if self.dialect is Dialect.CHECKED:
            self._load_checked()
        else:
            self._load_extended()
        return self.output

    def execute(self) -> StopReason:
        """Run instructions from the current counter until the program stops."""
        while True:
            self._instruction = list(self._fetch())
            self.counter += 1
            opcode = "".join(self._instruction[:2])
            address = self._operand()

            if self.dialect is Dialect.CHECKED:
                if opcode not in _CHECKED_OPCODES and self._instruction[0] != "H":
                    self._output.append(_INVALID_OPCODE)
                    return StopReason.INVALID_OPCODE
                if not 0 <= address < len(self._memory):
                    self._output.append(_INVALID_OPERAND)
                    return StopReason.INVALID_OPERAND

            if opcode == "GD":
                self._read()
            elif opcode == "PD":
                self._write()
            elif self._instruction[0] == "H":
                self._output.append(self.dialect.halt_message)
                return StopReason.HALTED
            elif opcode == "LR":
                self._register = list(self._word(address))
            elif opcode == "SR":
                self._store(address, self._register)
            elif opcode == "CR":
                self.toggle = self._word(address) == self._register
            elif opcode == "NR" and self.dialect is Dialect.EXTENDED:
                self.toggle = self._word(address) != self._register
            elif opcode == "BT":
                if self.toggle:
                    self.counter = address
                    self.toggle = False
            else:
                self.console.append(f"Invalid Instruction Encountered: {opcode}")
                return StopReason.INVALID_INSTRUCTION

    def memory_dump(self) -> str:
        """List every word as ``M[i]<tab>word``, a blank line after each ten."""
        lines = []
        for index, word in enumerate(self._memory):
            lines.append(f"M[{index}]\t{''.join(word)}")
            if index % 10 == 9:
                lines.append("")
        return "\n".join(lines) + "\n"

    # -- card handling -------------------------------------------------

    def _getline(self) -> None:
        if self._cards:
            text = self._cards.popleft()[:_LINE_LIMIT] + "\0"
        else:
            text = "\0"
        self._buffer[: len(text)] = text

    def _clear_buffer(self, count: int) -> None:
        self._buffer[:count] = [" "] * count

    def _control(self) -> str:
        return "".join(self._buffer[:4])

    def _load_checked(self) -> None:
        self.console.append("Reading Data...")
        self._clear_memory()
        while True:
            self._clear_buffer(_LOAD_CLEAR)
            self._getline()
            control = self._control()
            if control == "$AMJ":
                self._reset()
            elif control == "$DTA":
                self._start()
            elif control == "$END":
                self._load_index = 0
                self.console.append(self.memory_dump())
            else:
                self._load_card_checked()
            if not self._cards:
                break

    def _load_card_checked(self) -> None:
        position = 0
        limit = self._load_index + _CARD_WORDS
        while self._load_index < limit:
            self._store(self._load_index, self._buffer[position : position + _WORD])
            position += _WORD
            if self._buffer[position] in (" ", "\n"):
                break
            self._load_index += 1

    def _load_extended(self) -> None:
        self.console.append("Reading Data from Input File...")
        while self._cards:
            self._getline()
            control = self._control()
            if control == "$AMJ":
                self._reset()
            elif control == "$DTA":
                self._start()
            elif control == "$END":
                self.console.append("Execution Completed.")
            else:
                self._load_card_extended()

    def _load_card_extended(self) -> None:
        chars = "".join(self._buffer[:_CARD_CHARS]).split("\0", 1)[0]
        for position, char in enumerate(chars, start=self._load_index * _WORD):
            word, offset = divmod(position, _WORD)
            self._check_address(word)
            self._memory[word][offset] = char
        self._load_index += _CARD_WORDS

    # -- machine state -------------------------------------------------

    def _clear_memory(self) -> None:
        for word in self._memory:
            word[:] = [" "] * _WORD

    def _reset(self) -> None:
        self._clear_memory()
        if self.dialect is Dialect.CHECKED:
            self._instruction[3] = " "
            self._register[3] = " "
        else:
            self._instruction = [" "] * _WORD
            self._register = [" "] * _WORD
        self.toggle = False
        self.counter = 0

    def _start(self) -> None:
        self.counter = 0
        self.execute()

    def _fetch(self) -> list[str]:
        if not 0 <= self.counter < len(self._memory):
            raise MachineError(f"instruction counter {self.counter} is outside memory")
        return self._memory[self.counter]

    def _operand(self) -> int:
        zero = ord("0")
        return (ord(self._instruction[2]) - zero) * 10 + (
            ord(self._instruction[3]) - zero
        )

    def _check_address(self, address: int) -> None:
        if not 0 <= address < len(self._memory):
            raise MachineError(f"memory address {address} is out of range")

    def _word(self, address: int) -> list[str]:
        self._check_address(address)
        return self._memory[address]

    def _store(self, address: int, chars: Sequence[str]) -> None:
        self._check_address(address)
        self._memory[address] = list(chars)

    # -- service routines ----------------------------------------------

    def _read(self) -> None:
        if self.dialect is Dialect.CHECKED:
            self._clear_buffer(_READ_CLEAR)
            self._getline()
            self._instruction[3] = "0"
            address = self._operand()
            for start in range(0, _CARD_CHARS, _WORD):
                word = self._buffer[start : start + _WORD]
                self._store(address, word)
                if word == _END_MARK:
                    return
                address += 1
        else:
            self._getline()
            address = self._operand()
            for offset, start in enumerate(range(0, _CARD_CHARS, _WORD)):
                self._store(address + offset, self._buffer[start : start + _WORD])

    def _write(self) -> None:
        if self.dialect is Dialect.CHECKED:
            self._instruction[3] = "0"
        address = self._operand()
        text = "".join("".join(self._word(address + i)) for i in range(_CARD_WORDS))
        self._output.append(text + "\n")


def run_job(text: str, dialect: Dialect = Dialect.CHECKED) -> str:
    """Run a deck given as text and return the program output."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return Machine(dialect, lines).run()