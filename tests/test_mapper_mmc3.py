import pytest

from simplenes.cartridge import Cartridge
from simplenes.mapper import NameTableMirroring
from simplenes.mapper_mmc3 import MapperMMC3


def _banked(count, size):
    return b"".join(bytes([i]) * size for i in range(count))


class _Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


@pytest.fixture
def irq():
    return _Counter()


@pytest.fixture
def mirror():
    return _Counter()


@pytest.fixture
def mapper(irq, mirror):
    cart = Cartridge(prg_rom=_banked(8, 0x2000), chr_rom=_banked(32, 0x400))
    return MapperMMC3(cart, irq, mirror)


@pytest.mark.parametrize("address, bank", [(0x8000, 6), (0xA000, 7), (0xC000, 6), (0xE000, 7)])
def test_initial_prg_banks(mapper, address, bank):
    assert mapper.read_prg(address) == bank


def test_prg_mode_zero_switches_8000(mapper):
    mapper.write_prg(0x8000, 6)
    mapper.write_prg(0x8001, 2)
    assert (mapper.read_prg(0x8000), mapper.read_prg(0xC000)) == (2, 6)


def test_prg_mode_one_switches_c000(mapper):
    mapper.write_prg(0x8000, 0x46)
    mapper.write_prg(0x8001, 3)
    assert [mapper.read_prg(a) for a in (0xC000, 0x8000, 0xE000)] == [3, 6, 7]


@pytest.mark.parametrize(
    "select, value, expected",
    [
        (2, 5, {0x1000: 5}),
        (0x82, 5, {0x0000: 5}),
        (0, 9, {0x0000: 8, 0x0400: 9}),
    ],
)
def test_chr_banking(mapper, select, value, expected):
    mapper.write_prg(0x8000, select)
    mapper.write_prg(0x8001, value)
    assert {address: mapper.read_chr(address) for address in expected} == expected


def test_mirroring(mapper, mirror):
    mapper.write_prg(0xA000, 1)
    assert mapper.name_table_mirroring() == NameTableMirroring.HORIZONTAL
    mapper.write_prg(0xA000, 0)
    assert mapper.name_table_mirroring() == NameTableMirroring.VERTICAL
    assert mirror.calls == 2


def test_four_screen_cartridge(irq, mirror):
    cart = Cartridge(prg_rom=_banked(8, 0x2000), chr_rom=_banked(32, 0x400), name_table_mirroring=8)
    mapper = MapperMMC3(cart, irq, mirror)
    mapper.write_prg(0xA000, 1)
    assert mapper.name_table_mirroring() == NameTableMirroring.FOUR_SCREEN


def test_prg_ram_round_trip(mapper):
    mapper.write_prg(0x6010, 0x42)
    assert mapper.read_prg(0x6010) == 0x42


def test_mirroring_ram_round_trip(mapper):
    mapper.write_chr(0x2100, 0x33)
    assert mapper.read_chr(0x2100) == 0x33


def _irq_history(mapper, irq, scanlines):
    history = []
    for _ in range(scanlines):
        mapper.scanline_irq()
        history.append(irq.calls)
    return history


def test_irq_fires_on_zero_transition(mapper, irq):
    mapper.write_prg(0xC000, 2)
    mapper.write_prg(0xC001, 0)
    mapper.write_prg(0xE001, 0)
    assert [mapper.read_prg(a) for a in (0xC000, 0xE000)] == [6, 7]
    assert _irq_history(mapper, irq, 3) == [0, 0, 1]


def test_irq_disabled(mapper, irq):
    mapper.write_prg(0xC000, 1)
    mapper.write_prg(0xC001, 0)
    mapper.write_prg(0xE000, 0)
    assert [mapper.read_prg(a) for a in (0xC000, 0xE000)] == [6, 7]
    assert _irq_history(mapper, irq, 4) == [0, 0, 0, 0]