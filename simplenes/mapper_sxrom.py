"""Mapper 1 (MMC1): serially loaded registers for PRG/CHR banking and mirroring."""

import logging
from typing import Callable

from simplenes.cartridge import Cartridge
from simplenes.mapper import Mapper, MapperType, NameTableMirroring, _CharacterMemory

log = logging.getLogger(__name__)

_MIRRORING_MODES = (
    NameTableMirroring.ONE_SCREEN_LOWER,
    NameTableMirroring.ONE_SCREEN_HIGHER,
    NameTableMirroring.VERTICAL,
    NameTableMirroring.HORIZONTAL,
)


class MapperSxROM(Mapper):
    def __init__(self, cartridge: Cartridge, mirroring_callback: Callable[[], None]) -> None:
        super().__init__(cartridge, MapperType.SXROM)
        self._mirroring_callback = mirroring_callback
        self._mirroring = NameTableMirroring.HORIZONTAL
        self._mode_chr = 0
        self._mode_prg = 3
        self._temp_register = 0
        self._write_counter = 0
        self._reg_prg = 0
        self._reg_chr0 = 0
        self._reg_chr1 = 0

        self._chr = _CharacterMemory(cartridge.chr_rom)
        if not self._chr.uses_ram:
            log.info("Using CHR-ROM")
        # Bank start offsets into CHR-ROM and PRG-ROM.
        self._first_bank_chr = 0
        self._second_bank_chr = 0x1000 * self._reg_chr1
        self._first_bank_prg = 0
        self._second_bank_prg = len(cartridge.prg_rom) - 0x4000

    def read_prg(self, address: int) -> int:
        base = self._first_bank_prg if address < 0xC000 else self._second_bank_prg
        return self.cartridge.prg_rom[base + (address & 0x3FFF)]

    def name_table_mirroring(self) -> NameTableMirroring:
        return self._mirroring

    def write_prg(self, address: int, value: int) -> None:
        if value & 0x80:
            self._temp_register = 0
            self._write_counter = 0
            self._mode_prg = 3
            self._calculate_prg_banks()
            return

        self._temp_register = (self._temp_register >> 1) | ((value & 1) << 4)
        self._write_counter += 1
        if self._write_counter < 5:
            return

        register = self._temp_register
        if address <= 0x9FFF:
            self._write_control(register)
        elif address <= 0xBFFF:
            self._reg_chr0 = register
            self._first_bank_chr = 0x1000 * (register | (1 - self._mode_chr))
            if self._mode_chr == 0:
                self._second_bank_chr = self._first_bank_chr + 0x1000
        elif address <= 0xDFFF:
            self._reg_chr1 = register
            if self._mode_chr == 1:
                self._second_bank_chr = 0x1000 * register
        else:
            if register & 0x10:
                log.info("PRG-RAM activated")
            self._reg_prg = register & 0xF
            self._calculate_prg_banks()

        self._temp_register = 0
        self._write_counter = 0

    def _write_control(self, register: int) -> None:
        self._mirroring = _MIRRORING_MODES[register & 0x3]
        self._mirroring_callback()

        self._mode_chr = (register & 0x10) >> 4
        self._mode_prg = (register & 0xC) >> 2
        self._calculate_prg_banks()

        if self._mode_chr == 0:
            self._first_bank_chr = 0x1000 * (self._reg_chr0 | 1)
            self._second_bank_chr = self._first_bank_chr + 0x1000
        else:
            self._first_bank_chr = 0x1000 * self._reg_chr0
            self._second_bank_chr = 0x1000 * self._reg_chr1

    def _calculate_prg_banks(self) -> None:
        if self._mode_prg <= 1:
            self._first_bank_prg = 0x4000 * (self._reg_prg & ~1)
            self._second_bank_prg = self._first_bank_prg + 0x4000
        elif self._mode_prg == 2:
            self._first_bank_prg = 0
            self._second_bank_prg = 0x4000 * self._reg_prg
        else:
            self._first_bank_prg = 0x4000 * self._reg_prg
            self._second_bank_prg = len(self.cartridge.prg_rom) - 0x4000

    def read_chr(self, address: int) -> int:
        if self._chr.uses_ram:
            return self._chr.read(address)
        if address < 0x1000:
            return self.cartridge.chr_rom[self._first_bank_chr + address]
        return self.cartridge.chr_rom[self._second_bank_chr + (address & 0xFFF)]

    def write_chr(self, address: int, value: int) -> None:
        self._chr.write(address, value)