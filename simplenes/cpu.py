"""The 6502 core of the NES (the 2A03 without decimal arithmetic)."""

from __future__ import annotations

import logging
from typing import Protocol

from simplenes.opcodes import (
    ADDR_MODE_MASK,
    ADDR_MODE_SHIFT,
    BRANCH_CONDITION_MASK,
    BRANCH_INSTRUCTION_MASK,
    BRANCH_INSTRUCTION_MASK_RESULT,
    BRANCH_ON_FLAG_SHIFT,
    INSTRUCTION_MODE_MASK,
    IRQ_VECTOR,
    NMI_VECTOR,
    OPERATION_CYCLES,
    OPERATION_MASK,
    OPERATION_SHIFT,
    RESET_VECTOR,
    AddrMode1,
    AddrMode2,
    BranchOnFlag,
    InterruptType,
    Operation0,
    Operation1,
    Operation2,
    OperationImplied,
)

log = logging.getLogger(__name__)
trace_log = logging.getLogger(f"{__name__}.trace")


class Bus(Protocol):
    def read(self, address: int) -> int: ...

    def write(self, address: int, value: int) -> None: ...


class CPU:
    """Executes one instruction per call to step once the previous one's cycles have passed."""

    def __init__(self, bus: Bus) -> None:
        self.bus = bus
        self.pc = 0
        self.sp = 0
        self.a = 0
        self.x = 0
        self.y = 0
        self.negative = False
        self.overflow = False
        self.decimal = False
        self.interrupt_disable = False
        self.zero = False
        self.carry = False
        self.cycles = 0
        self.skip_cycles = 0
        self._pending_nmi = False
        self._pending_irq = False

    # --- helpers -------------------------------------------------------

    def _flags(self, brk: bool) -> int:
        return (
            int(self.negative) << 7
            | int(self.overflow) << 6
            | 1 << 5
            | int(brk) << 4
            | int(self.decimal) << 3
            | int(self.interrupt_disable) << 2
            | int(self.zero) << 1
            | int(self.carry)
        )

    @property
    def status(self) -> int:
        """The processor status byte as the trace shows it (B clear, bit 5 set)."""
        return self._flags(False)

    def _set_flags(self, flags: int) -> None:
        self.negative = bool(flags & 0x80)
        self.overflow = bool(flags & 0x40)
        self.decimal = bool(flags & 0x8)
        self.interrupt_disable = bool(flags & 0x4)
        self.zero = bool(flags & 0x2)
        self.carry = bool(flags & 0x1)

    def _set_zn(self, value: int) -> None:
        value &= 0xFF
        self.zero = value == 0
        self.negative = bool(value & 0x80)

    def _pull(self) -> int:
        self.sp = (self.sp + 1) & 0xFF
        return self.bus.read(0x100 | self.sp)

    def _push(self, value: int) -> None:
        self.bus.write(0x100 | self.sp, value & 0xFF)
        self.sp = (self.sp - 1) & 0xFF

    def _skip_page_cross_cycle(self, a: int, b: int) -> None:
        if (a & 0xFF00) != (b & 0xFFFF & 0xFF00):
            self.skip_cycles += 1

    def _read_address(self, address: int) -> int:
        return self.bus.read(address & 0xFFFF) | self.bus.read((address + 1) & 0xFFFF) << 8

    def _fetch(self) -> int:
        value = self.bus.read(self.pc)
        self.pc = (self.pc + 1) & 0xFFFF
        return value

    def _fetch_address(self) -> int:
        address = self._read_address(self.pc)
        self.pc = (self.pc + 2) & 0xFFFF
        return address

    def _read_zero_page_pointer(self, zero_address: int) -> int:
        return self.bus.read(zero_address & 0xFF) | self.bus.read((zero_address + 1) & 0xFF) << 8

    # --- public interface ----------------------------------------------

    def reset(self, start_address: int | None = None) -> None:
        """Reset registers; start at start_address or at the reset vector."""
        if start_address is None:
            start_address = self._read_address(RESET_VECTOR)
        self.pc = start_address & 0xFFFF
        self.sp = 0xFD
        self.a = self.x = self.y = 0
        self.interrupt_disable = True
        self.carry = self.decimal = self.negative = self.overflow = self.zero = False
        self.skip_cycles = 0
        self.cycles = 0

    def interrupt(self, kind: InterruptType) -> None:
        """Request an IRQ or NMI, serviced before the next instruction."""
        if kind == InterruptType.IRQ:
            self._pending_irq = True
        elif kind == InterruptType.NMI:
            self._pending_nmi = True

    def skip_dma_cycles(self) -> None:
        """Stall for the duration of an OAM DMA transfer."""
        self.skip_cycles += 513
        self.skip_cycles += self.cycles & 1

    def _interrupt_sequence(self, kind: InterruptType) -> None:
        if self.interrupt_disable and kind not in (InterruptType.NMI, InterruptType.BRK):
            return

        if kind == InterruptType.BRK:
            self.pc = (self.pc + 1) & 0xFFFF

        self._push(self.pc >> 8)
        self._push(self.pc)
        self._push(self._flags(kind == InterruptType.BRK))

        self.interrupt_disable = True
        vector = NMI_VECTOR if kind == InterruptType.NMI else IRQ_VECTOR
        self.pc = self._read_address(vector)
        self.skip_cycles += 7

    def step(self) -> None:
        """Advance one CPU cycle."""
        self.cycles += 1

        remaining = self.skip_cycles
        self.skip_cycles -= 1
        if remaining > 1:
            return
        self.skip_cycles = 0

        if self._pending_nmi:
            self._interrupt_sequence(InterruptType.NMI)
            self._pending_nmi = self._pending_irq = False
            return
        if self._pending_irq:
            self._interrupt_sequence(InterruptType.IRQ)
            self._pending_nmi = self._pending_irq = False
            return

        if trace_log.isEnabledFor(logging.DEBUG):
            trace_log.debug(
                "%04X  %02X  A:%02X X:%02X Y:%02X P:%02X SP:%02X CYC:%3d",
                self.pc,
                self.bus.read(self.pc),
                self.a,
                self.x,
                self.y,
                self.status,
                self.sp,
                ((self.cycles - 1) * 3) % 341,
            )

        opcode = self._fetch()
        length = OPERATION_CYCLES[opcode]
        if length and (
            self._execute_implied(opcode)
            or self._execute_branch(opcode)
            or self._execute_type1(opcode)
            or self._execute_type2(opcode)
            or self._execute_type0(opcode)
        ):
            self.skip_cycles += length
        else:
            log.error("Unrecognized opcode: %x", opcode)

    # --- instruction groups --------------------------------------------

    def _execute_implied(self, opcode: int) -> bool:
        match opcode:
            case OperationImplied.NOP:
                pass
            case OperationImplied.BRK:
                self._interrupt_sequence(InterruptType.BRK)
            case OperationImplied.JSR:
                return_address = (self.pc + 1) & 0xFFFF
                self._push(return_address >> 8)
                self._push(return_address)
                self.pc = self._read_address(self.pc)
            case OperationImplied.RTS:
                low = self._pull()
                high = self._pull()
                self.pc = ((low | high << 8) + 1) & 0xFFFF
            case OperationImplied.RTI:
                self._set_flags(self._pull())
                low = self._pull()
                high = self._pull()
                self.pc = low | high << 8
            case OperationImplied.JMP:
                self.pc = self._read_address(self.pc)
            case OperationImplied.JMPI:
                location = self._read_address(self.pc)
                page = location & 0xFF00
                self.pc = self.bus.read(location) | self.bus.read(page | ((location + 1) & 0xFF)) << 8
            case OperationImplied.PHP:
                self._push(self._flags(True))
            case OperationImplied.PLP:
                self._set_flags(self._pull())
            case OperationImplied.PHA:
                self._push(self.a)
            case OperationImplied.PLA:
                self.a = self._pull()
                self._set_zn(self.a)
            case OperationImplied.DEY:
                self.y = (self.y - 1) & 0xFF
                self._set_zn(self.y)
            case OperationImplied.DEX:
                self.x = (self.x - 1) & 0xFF
                self._set_zn(self.x)
            case OperationImplied.TAY:
                self.y = self.a
                self._set_zn(self.y)
            case OperationImplied.INY:
                self.y = (self.y + 1) & 0xFF
                self._set_zn(self.y)
            case OperationImplied.INX:
                self.x = (self.x + 1) & 0xFF
                self._set_zn(self.x)
            case OperationImplied.CLC:
                self.carry = False
            case OperationImplied.SEC:
                self.carry = True
            case OperationImplied.CLI:
                self.interrupt_disable = False
            case OperationImplied.SEI:
                self.interrupt_disable = True
            case OperationImplied.CLD:
                self.decimal = False
            case OperationImplied.SED:
                self.decimal = True
            case OperationImplied.TYA:
                self.a = self.y
                self._set_zn(self.a)
            case OperationImplied.CLV:
                self.overflow = False
            case OperationImplied.TXA:
                self.a = self.x
                self._set_zn(self.a)
            case OperationImplied.TXS:
                self.sp = self.x
            case OperationImplied.TAX:
                self.x = self.a
                self._set_zn(self.x)
            case OperationImplied.TSX:
                self.x = self.sp
                self._set_zn(self.x)
            case _:
                return False
        return True

    def _execute_branch(self, opcode: int) -> bool:
        if (opcode & BRANCH_INSTRUCTION_MASK) != BRANCH_INSTRUCTION_MASK_RESULT:
            return False

        wanted = bool(opcode & BRANCH_CONDITION_MASK)
        flag = {
            BranchOnFlag.NEGATIVE: self.negative,
            BranchOnFlag.OVERFLOW: self.overflow,
            BranchOnFlag.CARRY: self.carry,
            BranchOnFlag.ZERO: self.zero,
        }[BranchOnFlag(opcode >> BRANCH_ON_FLAG_SHIFT)]

        if wanted == flag:
            offset = self._fetch()
            if offset & 0x80:
                offset -= 0x100
            self.skip_cycles += 1
            new_pc = (self.pc + offset) & 0xFFFF
            self._skip_page_cross_cycle(self.pc, new_pc)
            self.pc = new_pc
        else:
            self.pc = (self.pc + 1) & 0xFFFF
        return True

    def _execute_type1(self, opcode: int) -> bool:
        if (opcode & INSTRUCTION_MODE_MASK) != 0x1:
            return False

        op = Operation1((opcode & OPERATION_MASK) >> OPERATION_SHIFT)
        mode = AddrMode1((opcode & ADDR_MODE_MASK) >> ADDR_MODE_SHIFT)

        if mode == AddrMode1.INDEXED_INDIRECT_X:
            location = self._read_zero_page_pointer((self.x + self._fetch()) & 0xFF)
        elif mode == AddrMode1.ZERO_PAGE:
            location = self._fetch()
        elif mode == AddrMode1.IMMEDIATE:
            location = self.pc
            self.pc = (self.pc + 1) & 0xFFFF
        elif mode == AddrMode1.ABSOLUTE:
            location = self._fetch_address()
        elif mode == AddrMode1.INDIRECT_Y:
            location = self._read_zero_page_pointer(self._fetch())
            if op != Operation1.STA:
                self._skip_page_cross_cycle(location, location + self.y)
            location = (location + self.y) & 0xFFFF
        elif mode == AddrMode1.INDEXED_X:
            location = (self._fetch() + self.x) & 0xFF
        else:
            index = self.y if mode == AddrMode1.ABSOLUTE_Y else self.x
            location = self._fetch_address()
            if op != Operation1.STA:
                self._skip_page_cross_cycle(location, location + index)
            location = (location + index) & 0xFFFF

        bus = self.bus
        if op == Operation1.ORA:
            self.a |= bus.read(location)
            self._set_zn(self.a)
        elif op == Operation1.AND:
            self.a &= bus.read(location)
            self._set_zn(self.a)
        elif op == Operation1.EOR:
            self.a ^= bus.read(location)
            self._set_zn(self.a)
        elif op == Operation1.ADC:
            operand = bus.read(location)
            total = self.a + operand + int(self.carry)
            self.carry = bool(total & 0x100)
            self.overflow = bool((self.a ^ total) & (operand ^ total) & 0x80)
            self.a = total & 0xFF
            self._set_zn(self.a)
        elif op == Operation1.STA:
            bus.write(location, self.a)
        elif op == Operation1.LDA:
            self.a = bus.read(location)
            self._set_zn(self.a)
        elif op == Operation1.SBC:
            subtrahend = bus.read(location)
            diff = (self.a - subtrahend - int(not self.carry)) & 0xFFFF
            self.carry = not diff & 0x100
            self.overflow = bool((self.a ^ diff) & (~subtrahend ^ diff) & 0x80)
            self.a = diff & 0xFF
            self._set_zn(diff)
        else:  # CMP
            diff = (self.a - bus.read(location)) & 0xFFFF
            self.carry = not diff & 0x100
            self._set_zn(diff)
        return True

    def _execute_type2(self, opcode: int) -> bool:
        if (opcode & INSTRUCTION_MODE_MASK) != 0x2:
            return False

        op = Operation2((opcode & OPERATION_MASK) >> OPERATION_SHIFT)
        try:
            mode = AddrMode2((opcode & ADDR_MODE_MASK) >> ADDR_MODE_SHIFT)
        except ValueError:
            return False

        index = self.y if op in (Operation2.LDX, Operation2.STX) else self.x
        location = 0
        if mode == AddrMode2.IMMEDIATE:
            location = self.pc
            self.pc = (self.pc + 1) & 0xFFFF
        elif mode == AddrMode2.ZERO_PAGE:
            location = self._fetch()
        elif mode == AddrMode2.ABSOLUTE:
            location = self._fetch_address()
        elif mode == AddrMode2.INDEXED:
            location = (self._fetch() + index) & 0xFF
        elif mode == AddrMode2.ABSOLUTE_INDEXED:
            location = self._fetch_address()
            self._skip_page_cross_cycle(location, location + index)
            location = (location + index) & 0xFFFF

        bus = self.bus
        accumulator = mode == AddrMode2.ACCUMULATOR
        if op in (Operation2.ASL, Operation2.ROL):
            carry_in = int(self.carry and op == Operation2.ROL)
            operand = self.a if accumulator else bus.read(location)
            self.carry = bool(operand & 0x80)
            result = ((operand << 1) | carry_in) & 0xFF
            self._set_zn(result)
            if accumulator:
                self.a = result
            else:
                bus.write(location, result)
        elif op in (Operation2.LSR, Operation2.ROR):
            carry_in = int(self.carry and op == Operation2.ROR)
            operand = self.a if accumulator else bus.read(location)
            self.carry = bool(operand & 1)
            result = (operand >> 1) | carry_in << 7
            self._set_zn(result)
            if accumulator:
                self.a = result
            else:
                bus.write(location, result)
        elif op == Operation2.STX:
            bus.write(location, self.x)
        elif op == Operation2.LDX:
            self.x = bus.read(location)
            self._set_zn(self.x)
        elif op == Operation2.DEC:
            value = (bus.read(location) - 1) & 0xFF
            self._set_zn(value)
            bus.write(location, value)
        else:  # INC
            value = (bus.read(location) + 1) & 0xFF
            self._set_zn(value)
            bus.write(location, value)
        return True

    def _execute_type0(self, opcode: int) -> bool:
        if (opcode & INSTRUCTION_MODE_MASK) != 0x0:
            return False

        mode = (opcode & ADDR_MODE_MASK) >> ADDR_MODE_SHIFT
        if mode == AddrMode2.IMMEDIATE:
            location = self.pc
            self.pc = (self.pc + 1) & 0xFFFF
        elif mode == AddrMode2.ZERO_PAGE:
            location = self._fetch()
        elif mode == AddrMode2.ABSOLUTE:
            location = self._fetch_address()
        elif mode == AddrMode2.INDEXED:
            location = (self._fetch() + self.x) & 0xFF
        elif mode == AddrMode2.ABSOLUTE_INDEXED:
            location = self._fetch_address()
            self._skip_page_cross_cycle(location, location + self.x)
            location = (location + self.x) & 0xFFFF
        else:
            return False

        try:
            op = Operation0((opcode & OPERATION_MASK) >> OPERATION_SHIFT)
        except ValueError:
            return False

        bus = self.bus
        if op == Operation0.BIT:
            operand = bus.read(location)
            self.zero = not self.a & operand
            self.overflow = bool(operand & 0x40)
            self.negative = bool(operand & 0x80)
        elif op == Operation0.STY:
            bus.write(location, self.y)
        elif op == Operation0.LDY:
            self.y = bus.read(location)
            self._set_zn(self.y)
        else:
            register = self.y if op == Operation0.CPY else self.x
            diff = (register - bus.read(location)) & 0xFFFF
            self.carry = not diff & 0x100
            self._set_zn(diff)
        return True