"""CPU address bus: internal RAM, I/O registers, work RAM and cartridge space."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable

from simplenes.mapper import Mapper

log = logging.getLogger(__name__)

_PAGE_SIZE = 0x100


class IORegister(IntEnum):
    PPUCTRL = 0x2000
    PPUMASK = 0x2001
    PPUSTATUS = 0x2002
    OAMADDR = 0x2003
    OAMDATA = 0x2004
    PPUSCROL = 0x2005
    PPUADDR = 0x2006
    PPUDATA = 0x2007
    OAMDMA = 0x4014
    JOY1 = 0x4016
    JOY2 = 0x4017


class MainBus:
    """Routes CPU reads and writes to RAM, registered I/O handlers and the mapper."""

    def __init__(self) -> None:
        self._mapper: Mapper | None = None
        self._ram = bytearray(0x800)
        self._ext_ram = bytearray()
        self._write_callbacks: dict[IORegister, Callable[[int], None]] = {}
        self._read_callbacks: dict[IORegister, Callable[[], int]] = {}

    def _require_mapper(self) -> Mapper:
        if self._mapper is None:
            raise RuntimeError("No mapper has been set on the main bus")
        return self._mapper

    def set_mapper(self, mapper: Mapper) -> None:
        """Attach the cartridge mapper; allocates work RAM when the cartridge has it."""
        if mapper is None:
            raise ValueError("Mapper is None")
        self._mapper = mapper
        if mapper.has_extended_ram():
            self._ext_ram = bytearray(0x2000)

    def set_read_callback(self, register: int, callback: Callable[[], int]) -> None:
        """Register the handler for reads of an I/O register."""
        if callback is None:
            raise ValueError("callback argument is None")
        reg = IORegister(register)
        if reg in self._read_callbacks:
            raise ValueError(f"Read callback already registered for {reg.name}")
        self._read_callbacks[reg] = callback

    def set_write_callback(self, register: int, callback: Callable[[int], None]) -> None:
        """Register the handler for writes to an I/O register."""
        if callback is None:
            raise ValueError("callback argument is None")
        reg = IORegister(register)
        if reg in self._write_callbacks:
            raise ValueError(f"Write callback already registered for {reg.name}")
        self._write_callbacks[reg] = callback

    def page(self, page: int) -> bytes:
        """Return the 256 bytes of a CPU page, as used by OAM DMA."""
        address = (page & 0xFF) << 8
        if address < 0x2000:
            start = address & 0x7FF
            return bytes(self._ram[start:start + _PAGE_SIZE])

        if 0x6000 <= address < 0x8000 and self._require_mapper().has_extended_ram():
            start = address - 0x6000
            return bytes(self._ext_ram[start:start + _PAGE_SIZE])

        if 0x4020 <= address < 0x6000:
            message = "Expansion ROM access attempted, which is unsupported"
        elif 0x2000 <= address < 0x4020:
            message = "Register address memory pointer access attempt"
        else:
            message = f"Unexpected DMA request: {address:#x} ({page})"
        log.error(message)
        raise ValueError(message)

    def _lookup(self, table: dict, address: int):
        try:
            return table.get(IORegister(address))
        except ValueError:
            return None

    def write(self, address: int, value: int) -> None:
        address &= 0xFFFF
        value &= 0xFF
        if address < 0x2000:
            self._ram[address & 0x7FF] = value
            return

        if address >= 0x8000:
            self._require_mapper().write_prg(address, value)
            return

        if 0x6000 <= address < 0x8000:
            if self._require_mapper().has_extended_ram():
                self._ext_ram[address - 0x6000] = value
            return

        if address >= 0x4020:
            log.debug("Expansion ROM access attempted. This is currently unsupported")
            return

        if address < 0x4000:
            callback = self._lookup(self._write_callbacks, address & 0x2007)
        elif 0x4014 <= address < 0x4017:
            callback = self._lookup(self._write_callbacks, address)
        else:
            log.debug("Write access attempt at: %x", address)
            return

        if callback is not None:
            callback(value)
        else:
            log.debug("No write callback registered for I/O register at: %x", address)

    def read(self, address: int) -> int:
        address &= 0xFFFF
        if address < 0x2000:
            return self._ram[address & 0x7FF]

        if address >= 0x8000:
            return self._require_mapper().read_prg(address)

        if 0x6000 <= address < 0x8000:
            if self._require_mapper().has_extended_ram():
                return self._ext_ram[address - 0x6000]
            return 0

        if address >= 0x4020:
            log.debug("Expansion ROM read attempted. This is currently unsupported")
            return 0

        if address < 0x4000:
            callback = self._lookup(self._read_callbacks, address & 0x2007)
        elif 0x4014 <= address < 0x4018:
            callback = self._lookup(self._read_callbacks, address)
        else:
            log.debug("Read access attempt at: %x", address)
            return 0xFF

        if callback is not None:
            return callback() & 0xFF
        log.debug("No read callback registered for I/O register at: %x", address)
        return 0xFF