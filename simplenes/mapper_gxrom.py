"""Mapper 66: switchable 32KB PRG and 8KB CHR banks."""

import logging
from typing import Callable

from simplenes.cartridge import Cartridge
from simplenes.mapper import Mapper, MapperType, NameTableMirroring

log = logging.getLogger(__name__)


class MapperGxROM(Mapper):
    def __init__(self, cartridge: Cartridge, mirroring_callback: Callable[[], None]) -> None:
        super().__init__(cartridge, MapperType.GXROM)
        self._mirroring = NameTableMirroring.VERTICAL
        self._mirroring_callback = mirroring_callback
        self.prg_bank = 0
        self.chr_bank = 0

    def read_prg(self, address: int) -> int:
        return self._read_prg_32k(self.prg_bank, address)

    def write_prg(self, address: int, value: int) -> None:
        if address >= 0x8000:
            self.prg_bank = (value & 0x30) >> 4
            self.chr_bank = value & 0x3
            self._mirroring = NameTableMirroring.VERTICAL
        self._mirroring_callback()

    def read_chr(self, address: int) -> int:
        return self._read_chr_8k(self.chr_bank, address)

    def write_chr(self, address: int, value: int) -> None:
        log.info("not expecting writes here")

    def name_table_mirroring(self) -> NameTableMirroring:
        return self._mirroring