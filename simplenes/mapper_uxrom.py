"""Mapper 2: switchable 16KB PRG bank at $8000, last bank fixed at $C000."""

from simplenes.cartridge import Cartridge
from simplenes.mapper import Mapper, MapperType, _CharacterMemory


class MapperUxROM(Mapper):
    def __init__(self, cartridge: Cartridge) -> None:
        super().__init__(cartridge, MapperType.UXROM)
        self._select_prg = 0
        self._chr = _CharacterMemory(cartridge.chr_rom)
        self._last_bank = len(cartridge.prg_rom) - 0x4000

    def read_prg(self, address: int) -> int:
        if address < 0xC000:
            return self.cartridge.prg_rom[((address - 0x8000) & 0x3FFF) | (self._select_prg << 14)]
        return self.cartridge.prg_rom[self._last_bank + (address & 0x3FFF)]

    def write_prg(self, address: int, value: int) -> None:
        self._select_prg = value & 0xFF

    def read_chr(self, address: int) -> int:
        return self._chr.read(address)

    def write_chr(self, address: int, value: int) -> None:
        self._chr.write(address, value)