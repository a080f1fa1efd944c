"""CHIP-8 instruction decoding."""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    category: int  # First nibble
    x: int         # Second nibble (VX register)
    y: int         # Third nibble (VY register)
    n: int         # Fourth nibble (sprite height / sub-opcode)
    nn: int        # Last byte (8-bit immediate)
    nnn: int       # Last 12 bits (12-bit address)


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    return DecodedInstruction(
        raw=instruction,
        category=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


ALU_MNEMONICS = {
    0x0: "LD", 0x1: "OR", 0x2: "AND", 0x3: "XOR", 0x4: "ADD",
    0x5: "SUB", 0x6: "SHR", 0x7: "SUBN", 0xE: "SHL",
}

MISC_MNEMONICS = {
    0x07: "LD Vx, DT", 0x0A: "LD Vx, K", 0x15: "LD DT, Vx",
    0x18: "LD ST, Vx", 0x1E: "ADD I, Vx", 0x29: "LD F, Vx",
    0x33: "LD B, Vx", 0x55: "LD [I], Vx", 0x65: "LD Vx, [I]",
}


def disassemble(instruction: int) -> str:
    """Render an instruction word as an assembler mnemonic."""
    d = decode(int(instruction))
    vx, vy = f"V{d.x:X}", f"V{d.y:X}"

    if d.raw == 0x00E0:
        return "CLS"
    if d.raw == 0x00EE:
        return "RET"
    if d.category == 0x1:
        return f"JP ${d.nnn:03X}"
    if d.category == 0x2:
        return f"CALL ${d.nnn:03X}"
    if d.category == 0x3:
        return f"SE {vx}, ${d.nn:02X}"
    if d.category == 0x4:
        return f"SNE {vx}, ${d.nn:02X}"
    if d.category == 0x5:
        return f"SE {vx}, {vy}"
    if d.category == 0x6:
        return f"LD {vx}, ${d.nn:02X}"
    if d.category == 0x7:
        return f"ADD {vx}, ${d.nn:02X}"
    if d.category == 0x8 and d.n in ALU_MNEMONICS:
        return f"{ALU_MNEMONICS[d.n]} {vx}, {vy}"
    if d.category == 0x9:
        return f"SNE {vx}, {vy}"
    if d.category == 0xA:
        return f"LD I, ${d.nnn:03X}"
    if d.category == 0xB:
        return f"JP V0, ${d.nnn:03X}"
    if d.category == 0xC:
        return f"RND {vx}, ${d.nn:02X}"
    if d.category == 0xD:
        return f"DRW {vx}, {vy}, {d.n}"
    if d.category == 0xE and d.nn == 0x9E:
        return f"SKP {vx}"
    if d.category == 0xE and d.nn == 0xA1:
        return f"SKNP {vx}"
    if d.category == 0xF and d.nn in MISC_MNEMONICS:
        return MISC_MNEMONICS[d.nn].replace("Vx", vx)
    return f"??? ${d.raw:04X}"
