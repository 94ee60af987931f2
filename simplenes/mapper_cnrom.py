"""Mapper 3: fixed PRG, switchable 8KB CHR bank."""

import logging

from simplenes.cartridge import Cartridge
from simplenes.mapper import Mapper, MapperType

log = logging.getLogger(__name__)


class MapperCNROM(Mapper):
    def __init__(self, cartridge: Cartridge) -> None:
        super().__init__(cartridge, MapperType.CNROM)
        self._select_chr = 0

    def read_prg(self, address: int) -> int:
        return self._read_fixed_prg(address)

    def write_prg(self, address: int, value: int) -> None:
        self._select_chr = value & 0x3

    def read_chr(self, address: int) -> int:
        return self.cartridge.chr_rom[address | (self._select_chr << 13)]

    def write_chr(self, address: int, value: int) -> None:
        log.info("Read-only CHR memory write attempt at %x", address)