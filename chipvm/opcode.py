"""CHIP-8 opcode splitting."""

from chex import dataclass


@dataclass(frozen=True)
class Opcode:
    """Raw CHIP-8 instruction word split into its fields."""
    raw: int
    i: int    # First nibble (instruction family)
    x: int    # Second nibble (VX register)
    y: int    # Third nibble (VY register)
    n: int    # Fourth nibble (4-bit immediate)
    nn: int   # Last byte (8-bit immediate)
    nnn: int  # Last 12 bits (12-bit address)


def pack_u16(high: int, low: int) -> int:
    """Pack two bytes into a big-endian 16-bit word."""
    return ((int(high) & 0xFF) << 8) | (int(low) & 0xFF)


def split(word: int) -> Opcode:
    """Split 16-bit instruction word into components."""
    word = int(word) & 0xFFFF
    return Opcode(
        raw=word,
        i=(word & 0xF000) >> 12,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        nn=word & 0x00FF,
        nnn=word & 0x0FFF
    )
