import pytest

from simplenes.cartridge import Cartridge
from simplenes.mapper import Mapper, MapperType, NameTableMirroring
from simplenes.picture_bus import PictureBus


class FakeMapper(Mapper):
    def __init__(self, mirroring):
        super().__init__(Cartridge(), MapperType.NROM)
        self.mirroring = mirroring
        self.memory = bytearray(0x4000)
        self.irqs = 0

    def name_table_mirroring(self):
        return self.mirroring

    def scanline_irq(self):
        self.irqs += 1

    def read_prg(self, address):
        return 0

    def write_prg(self, address, value):
        pass

    def read_chr(self, address):
        return self.memory[address]

    def write_chr(self, address, value):
        self.memory[address] = value


def _bus(mirroring):
    mapper = FakeMapper(mirroring)
    bus = PictureBus()
    bus.set_mapper(mapper)
    return bus, mapper


def test_vertical_mirroring():
    bus, _ = _bus(NameTableMirroring.VERTICAL)
    bus.write(0x2005, 0x11)
    assert bus.read(0x2805) == 0x11
    assert bus.read(0x2405) == 0


def test_horizontal_mirroring():
    bus, _ = _bus(NameTableMirroring.HORIZONTAL)
    bus.write(0x2005, 0x22)
    assert bus.read(0x2405) == 0x22
    assert bus.read(0x2805) == 0


def test_one_screen_mirrors_all_tables():
    bus, _ = _bus(NameTableMirroring.ONE_SCREEN_HIGHER)
    bus.write(0x2C10, 0x33)
    assert [bus.read(base + 0x10) for base in (0x2000, 0x2400, 0x2800, 0x2C00)] == [0x33] * 4


def test_area_3000_mirrors_2000():
    bus, _ = _bus(NameTableMirroring.VERTICAL)
    bus.write(0x3123, 0x44)
    assert bus.read(0x2123) == 0x44


def test_four_screen_goes_to_mapper():
    bus, mapper = _bus(NameTableMirroring.FOUR_SCREEN)
    bus.write(0x3456, 0x55)
    assert mapper.memory[0x2456] == 0x55
    assert bus.read(0x2456) == 0x55


def test_pattern_table_uses_mapper():
    bus, mapper = _bus(NameTableMirroring.VERTICAL)
    bus.write(0x0100, 0x66)
    assert mapper.memory[0x0100] == 0x66
    assert bus.read(0x4100) == 0x66


def test_palette_mirrors_background_colour():
    bus, _ = _bus(NameTableMirroring.VERTICAL)
    bus.write(0x3F10, 0x0F)
    assert bus.read(0x3F00) == 0x0F
    assert bus.read_palette(0x10) == 0x0F
    assert bus.read(0x3F20) == 0x0F


def test_palette_non_mirrored_entries_are_distinct():
    bus, _ = _bus(NameTableMirroring.VERTICAL)
    bus.write(0x3F11, 0x01)
    bus.write(0x3F01, 0x02)
    assert bus.read_palette(0x11) == 0x01
    assert bus.read_palette(0x01) == 0x02


def test_update_mirroring_follows_mapper():
    bus, mapper = _bus(NameTableMirroring.VERTICAL)
    bus.write(0x2000, 0x77)
    mapper.mirroring = NameTableMirroring.HORIZONTAL
    bus.update_mirroring()
    assert bus.read(0x2400) == 0x77


def test_scanline_irq_forwarded():
    bus, mapper = _bus(NameTableMirroring.VERTICAL)
    bus.scanline_irq()
    bus.scanline_irq()
    assert mapper.irqs == 2


def test_set_mapper_none_raises():
    with pytest.raises(ValueError):
        PictureBus().set_mapper(None)