import pytest

from simplenes.opcodes import (
    ADDR_MODE_MASK,
    ADDR_MODE_SHIFT,
    BRANCH_CONDITION_MASK,
    BRANCH_INSTRUCTION_MASK,
    BRANCH_INSTRUCTION_MASK_RESULT,
    BRANCH_ON_FLAG_SHIFT,
    INSTRUCTION_MODE_MASK,
    OPERATION_CYCLES,
    OPERATION_MASK,
    OPERATION_SHIFT,
    AddrMode1,
    AddrMode2,
    BranchOnFlag,
    InterruptType,
    Operation0,
    Operation1,
    Operation2,
    OperationImplied,
)


def _fields(opcode):
    return (
        opcode & INSTRUCTION_MODE_MASK,
        (opcode & OPERATION_MASK) >> OPERATION_SHIFT,
        (opcode & ADDR_MODE_MASK) >> ADDR_MODE_SHIFT,
    )


@pytest.mark.parametrize("opcode", [op.value for op in OperationImplied])
def test_implied_opcodes_have_cycles(opcode):
    assert OPERATION_CYCLES[OperationImplied(opcode)] > 0


@pytest.mark.parametrize(
    "opcode, name, cycles",
    [(0x00, "BRK", 7), (0xEA, "NOP", 2), (0x20, "JSR", 6), (0x6C, "JMPI", 5), (0x40, "RTI", 6)],
)
def test_implied_cycle_counts(opcode, name, cycles):
    op = OperationImplied(opcode)
    assert (op.name, OPERATION_CYCLES[op]) == (name, cycles)


@pytest.mark.parametrize("opcode", [0x02, 0x0F, 0xFF])
def test_unused_opcodes(opcode):
    assert OPERATION_CYCLES[opcode] == 0
    with pytest.raises(ValueError):
        OperationImplied(opcode)


@pytest.mark.parametrize(
    "opcode, operation, mode, cycles",
    [
        (0xA9, Operation1.LDA, AddrMode1.IMMEDIATE, 2),
        (0x91, Operation1.STA, AddrMode1.INDIRECT_Y, 6),
        (0x7D, Operation1.ADC, AddrMode1.ABSOLUTE_X, 4),
    ],
)
def test_decode_group_one(opcode, operation, mode, cycles):
    group, op, addr = _fields(opcode)
    assert group == 1
    assert (Operation1(op), AddrMode1(addr), OPERATION_CYCLES[opcode]) == (operation, mode, cycles)


@pytest.mark.parametrize(
    "opcode, operation, mode, cycles",
    [
        (0xBE, Operation2.LDX, AddrMode2.ABSOLUTE_INDEXED, 4),
        (0x0A, Operation2.ASL, AddrMode2.ACCUMULATOR, 2),
    ],
)
def test_decode_group_two(opcode, operation, mode, cycles):
    group, op, addr = _fields(opcode)
    assert group == 2
    assert (Operation2(op), AddrMode2(addr), OPERATION_CYCLES[opcode]) == (operation, mode, cycles)


@pytest.mark.parametrize(
    "opcode, operation, mode",
    [(0x2C, Operation0.BIT, AddrMode2.ABSOLUTE), (0xC0, Operation0.CPY, AddrMode2.IMMEDIATE)],
)
def test_decode_group_zero(opcode, operation, mode):
    group, op, addr = _fields(opcode)
    assert group == 0
    assert (Operation0(op), AddrMode2(addr)) == (operation, mode)


@pytest.mark.parametrize(
    "opcode, flag, on_set",
    [
        (0x10, BranchOnFlag.NEGATIVE, False),
        (0x50, BranchOnFlag.OVERFLOW, False),
        (0x90, BranchOnFlag.CARRY, False),
        (0xF0, BranchOnFlag.ZERO, True),
    ],
)
def test_decode_branches(opcode, flag, on_set):
    assert opcode & BRANCH_INSTRUCTION_MASK == BRANCH_INSTRUCTION_MASK_RESULT
    assert BranchOnFlag(opcode >> BRANCH_ON_FLAG_SHIFT) is flag
    assert bool(opcode & BRANCH_CONDITION_MASK) is on_set
    assert OPERATION_CYCLES[opcode] == 2


def test_interrupt_types_in_order():
    assert [kind.name for kind in InterruptType] == ["IRQ", "NMI", "BRK"]
    assert InterruptType(1) is InterruptType.NMI


def test_sparse_enums():
    assert AddrMode2(5) is AddrMode2.INDEXED
    assert Operation0(Operation0.STY + 1) is Operation0.LDY
    with pytest.raises(ValueError):
        AddrMode2(4)