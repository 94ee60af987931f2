"""Mapper 0: fixed PRG and CHR."""

import logging

from simplenes.cartridge import Cartridge
from simplenes.mapper import Mapper, MapperType, _CharacterMemory

log = logging.getLogger(__name__)


class MapperNROM(Mapper):
    def __init__(self, cartridge: Cartridge) -> None:
        super().__init__(cartridge, MapperType.NROM)
        self._chr = _CharacterMemory(cartridge.chr_rom)

    def read_prg(self, address: int) -> int:
        return self._read_fixed_prg(address)

    def write_prg(self, address: int, value: int) -> None:
        log.debug("ROM memory write attempt at %#x to set %#x", address, value)

    def read_chr(self, address: int) -> int:
        return self._chr.read(address)

    def write_chr(self, address: int, value: int) -> None:
        self._chr.write(address, value)