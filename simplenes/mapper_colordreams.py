"""Mapper 11: switchable 32KB PRG and 8KB CHR banks."""

from typing import Callable

from simplenes.cartridge import Cartridge
from simplenes.mapper import Mapper, MapperType, NameTableMirroring


class MapperColorDreams(Mapper):
    def __init__(self, cartridge: Cartridge, mirroring_callback: Callable[[], None]) -> None:
        super().__init__(cartridge, MapperType.COLOR_DREAMS)
        self._mirroring = NameTableMirroring.VERTICAL
        self._mirroring_callback = mirroring_callback
        self._prg_bank = 0
        self._chr_bank = 0

    def read_prg(self, address: int) -> int:
        return self._read_prg_32k(self._prg_bank, address)

    def write_prg(self, address: int, value: int) -> None:
        if address >= 0x8000:
            self._prg_bank = value & 0x3
            self._chr_bank = (value >> 4) & 0xF

    def read_chr(self, address: int) -> int:
        return self._read_chr_8k(self._chr_bank, address)

    def write_chr(self, address: int, value: int) -> None:
        """CHR is read-only; writes are dropped."""
        return None

    def name_table_mirroring(self) -> NameTableMirroring:
        return self._mirroring