import pytest

from simplenes.cartridge import Cartridge
from simplenes.mapper import Mapper, MapperType, NameTableMirroring


class _FlatMapper(Mapper):
    def __init__(self, cartridge):
        super().__init__(cartridge, MapperType.NROM)
        self.writes = []

    def read_prg(self, address):
        return self.cartridge.prg_rom[address - 0x8000]

    def write_prg(self, address, value):
        self.writes.append((address, value))

    def read_chr(self, address):
        return self.cartridge.chr_rom[address]

    def write_chr(self, address, value):
        self.writes.append((address, value))


def test_mirroring_comes_from_cartridge():
    assert _FlatMapper(Cartridge(name_table_mirroring=1)).name_table_mirroring() is NameTableMirroring.VERTICAL
    assert _FlatMapper(Cartridge(name_table_mirroring=8)).name_table_mirroring() is NameTableMirroring.FOUR_SCREEN


def test_extended_ram_is_reported():
    assert _FlatMapper(Cartridge()).has_extended_ram() is True


def test_type_is_kept():
    mapper = _FlatMapper(Cartridge())
    assert mapper.mapper_type is MapperType.NROM
    assert mapper.scanline_irq() is None and mapper.writes == []


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        Mapper(Cartridge(), MapperType.NROM)


def test_mapper_type_values():
    assert MapperType(66) is MapperType.GXROM
    assert MapperType(11) is MapperType.COLOR_DREAMS