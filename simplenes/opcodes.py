"""6502 opcode decoding constants, enumerations and cycle table."""

from enum import IntEnum

INSTRUCTION_MODE_MASK = 0x3

OPERATION_MASK = 0xE0
OPERATION_SHIFT = 5

ADDR_MODE_MASK = 0x1C
ADDR_MODE_SHIFT = 2

BRANCH_INSTRUCTION_MASK = 0x1F
BRANCH_INSTRUCTION_MASK_RESULT = 0x10
BRANCH_CONDITION_MASK = 0x20
BRANCH_ON_FLAG_SHIFT = 6

NMI_VECTOR = 0xFFFA
RESET_VECTOR = 0xFFFC
IRQ_VECTOR = 0xFFFE

# Enumerations numbered consecutively from zero, in decoding order.
BranchOnFlag = IntEnum("BranchOnFlag", "NEGATIVE OVERFLOW CARRY ZERO", start=0)
Operation1 = IntEnum("Operation1", "ORA AND EOR ADC STA LDA CMP SBC", start=0)
AddrMode1 = IntEnum(
    "AddrMode1",
    "INDEXED_INDIRECT_X ZERO_PAGE IMMEDIATE ABSOLUTE INDIRECT_Y INDEXED_X ABSOLUTE_Y ABSOLUTE_X",
    start=0,
)
Operation2 = IntEnum("Operation2", "ASL ROL LSR ROR STX LDX DEC INC", start=0)
InterruptType = IntEnum("InterruptType", "IRQ NMI BRK", start=0)


class AddrMode2(IntEnum):
    """Addressing modes of group 2 and group 0 instructions (sparse)."""

    IMMEDIATE = 0
    ZERO_PAGE = 1
    ACCUMULATOR = 2
    ABSOLUTE = 3
    INDEXED = 5
    ABSOLUTE_INDEXED = 7


class Operation0(IntEnum):
    """Group 0 operations that are decoded by bit fields."""

    BIT = 1
    STY = 4
    LDY = 5
    CPY = 6
    CPX = 7


class OperationImplied(IntEnum):
    """Opcodes that are decoded as a whole byte."""

    BRK = 0x00
    PHP = 0x08
    CLC = 0x18
    JSR = 0x20
    PLP = 0x28
    SEC = 0x38
    RTI = 0x40
    PHA = 0x48
    JMP = 0x4C
    CLI = 0x58
    RTS = 0x60
    PLA = 0x68
    JMPI = 0x6C
    SEI = 0x78
    DEY = 0x88
    TXA = 0x8A
    TYA = 0x98
    TXS = 0x9A
    TAY = 0xA8
    TAX = 0xAA
    CLV = 0xB8
    TSX = 0xBA
    INY = 0xC8
    DEX = 0xCA
    CLD = 0xD8
    INX = 0xE8
    NOP = 0xEA
    SED = 0xF8


# Base cycle count of every opcode, one row of sixteen opcodes per string;
# 0 marks an unused opcode.
_CYCLE_ROWS = (
    "7600035032200460",
    "2500046024000470",
    "6600335042204460",
    "2500046024000470",
    "6600035032203460",
    "2500046024000470",
    "6600035042205460",
    "2500046024000470",
    "0600333020204440",
    "2600444025200500",
    "2620333022204440",
    "2500444024204440",
    "2600335022204460",
    "2500046024000470",
    "2600335022224460",
    "2500046024000470",
)

OPERATION_CYCLES: tuple[int, ...] = tuple(int(digit) for row in _CYCLE_ROWS for digit in row)