"""Base class for cartridge mappers and shared memory helpers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import IntEnum

from simplenes.cartridge import Cartridge

log = logging.getLogger(__name__)


class NameTableMirroring(IntEnum):
    HORIZONTAL = 0
    VERTICAL = 1
    FOUR_SCREEN = 8
    ONE_SCREEN_LOWER = 9
    ONE_SCREEN_HIGHER = 10


class MapperType(IntEnum):
    NROM = 0
    SXROM = 1
    UXROM = 2
    CNROM = 3
    MMC3 = 4
    AXROM = 7
    COLOR_DREAMS = 11
    GXROM = 66


class _CharacterMemory:
    """CHR memory: the cartridge's CHR-ROM, or 8KB of RAM when it carries none."""

    def __init__(self, chr_rom: bytes) -> None:
        self.rom = chr_rom
        self.uses_ram = not chr_rom
        self.ram = bytearray(0x2000 if self.uses_ram else 0)
        if self.uses_ram:
            log.info("Uses character RAM")

    def read(self, address: int) -> int:
        return self.ram[address] if self.uses_ram else self.rom[address]

    def write(self, address: int, value: int) -> None:
        if self.uses_ram:
            self.ram[address] = value & 0xFF
        else:
            log.info("Read-only CHR memory write attempt at %x", address)


class Mapper(ABC):
    """Maps CPU and PPU address space onto cartridge memory."""

    def __init__(self, cartridge: Cartridge, mapper_type: MapperType) -> None:
        self.cartridge = cartridge
        self.mapper_type = mapper_type
        self.scanline_count = 0

    def scanline_irq(self) -> None:
        """Count a rendered scanline; mappers with an IRQ counter override this."""
        self.scanline_count += 1

    def name_table_mirroring(self) -> NameTableMirroring:
        return NameTableMirroring(self.cartridge.name_table_mirroring)

    def has_extended_ram(self) -> bool:
        return self.cartridge.has_extended_ram()

    @abstractmethod
    def read_prg(self, address: int) -> int: ...

    @abstractmethod
    def write_prg(self, address: int, value: int) -> None: ...

    @abstractmethod
    def read_chr(self, address: int) -> int: ...

    @abstractmethod
    def write_chr(self, address: int, value: int) -> None: ...

    def _read_fixed_prg(self, address: int) -> int:
        """Read PRG-ROM mapped linearly at $8000, mirroring a lone 16KB bank."""
        offset = address - 0x8000
        if len(self.cartridge.prg_rom) == 0x4000:
            offset &= 0x3FFF
        return self.cartridge.prg_rom[offset]

    def _read_prg_32k(self, bank: int, address: int) -> int:
        """Read from a 32KB PRG bank mapped at $8000; lower addresses read 0."""
        if address >= 0x8000:
            return self.cartridge.prg_rom[bank * 0x8000 + (address & 0x7FFF)]
        return 0

    def _read_chr_8k(self, bank: int, address: int) -> int:
        """Read from an 8KB CHR bank; addresses past the pattern tables read 0."""
        if address <= 0x1FFF:
            return self.cartridge.chr_rom[bank * 0x2000 + address]
        return 0