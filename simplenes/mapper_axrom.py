"""Mapper 7: switchable 32KB PRG bank with single-screen mirroring."""

import logging
from typing import Callable

from simplenes.cartridge import Cartridge
from simplenes.mapper import Mapper, MapperType, NameTableMirroring

log = logging.getLogger(__name__)


class MapperAxROM(Mapper):
    def __init__(self, cartridge: Cartridge, mirroring_callback: Callable[[], None]) -> None:
        super().__init__(cartridge, MapperType.AXROM)
        self._mirroring = NameTableMirroring.ONE_SCREEN_LOWER
        self._mirroring_callback = mirroring_callback
        self._prg_bank = 0
        self._character_ram = bytearray(0x2000)
        if len(cartridge.prg_rom) >= 0x8000:
            log.info("Using PRG-ROM OK")
        if not cartridge.chr_rom:
            log.info("Uses Character RAM OK")

    def read_prg(self, address: int) -> int:
        return self._read_prg_32k(self._prg_bank, address)

    def write_prg(self, address: int, value: int) -> None:
        if address >= 0x8000:
            self._prg_bank = value & 0x07
            self._mirroring = (
                NameTableMirroring.ONE_SCREEN_HIGHER if value & 0x10 else NameTableMirroring.ONE_SCREEN_LOWER
            )
            self._mirroring_callback()

    def name_table_mirroring(self) -> NameTableMirroring:
        return self._mirroring

    def read_chr(self, address: int) -> int:
        return self._character_ram[address] if address < 0x2000 else 0

    def write_chr(self, address: int, value: int) -> None:
        if address < 0x2000:
            self._character_ram[address] = value & 0xFF