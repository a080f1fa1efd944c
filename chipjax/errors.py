"""Exceptions raised by the CHIP-8 interpreter."""


class Chip8Error(Exception):
    """Base class for every fatal emulator error."""


class RomLoadError(Chip8Error):
    """ROM could not be read, is empty, or does not fit in memory."""


class UnknownOpcodeError(Chip8Error):
    """Instruction word with no mapped handler."""

    def __init__(self, instruction: int, address: int):
        self.instruction = instruction
        self.address = address
        super().__init__(
            f"Unknown opcode 0x{instruction:04X} at address 0x{address:03X}"
        )


class StackError(Chip8Error):
    """Call stack used outside its 16-entry capacity."""

    def __init__(self, message: str, address: int):
        self.address = address
        super().__init__(f"{message} at address 0x{address:03X}")


class StackOverflowError(StackError):
    def __init__(self, address: int):
        super().__init__("Stack overflow (CALL with 16 return addresses pushed)", address)


class StackUnderflowError(StackError):
    def __init__(self, address: int):
        super().__init__("Stack underflow (RET with empty stack)", address)


class MemoryAccessError(Chip8Error):
    """Fetch or I-relative access that runs past the end of memory."""

    def __init__(self, address: int, pc: int):
        self.address = address
        self.pc = pc
        super().__init__(
            f"Memory access out of range at 0x{address:03X} (instruction at 0x{pc:03X})"
        )
