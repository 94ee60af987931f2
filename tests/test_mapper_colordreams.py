import pytest

from simplenes.cartridge import Cartridge
from simplenes.mapper import NameTableMirroring
from simplenes.mapper_colordreams import MapperColorDreams


class _Tally:
    def __init__(self):
        self.count = 0

    def __call__(self):
        self.count += 1


@pytest.fixture
def tally():
    return _Tally()


@pytest.fixture
def dreams(tally):
    prg = b"".join(bytes([bank + 1]) * 0x8000 for bank in range(4))
    chr_rom = b"".join(bytes([bank + 100]) * 0x2000 for bank in range(4))
    return MapperColorDreams(Cartridge(prg_rom=prg, chr_rom=chr_rom), tally)


def test_defaults(dreams, tally):
    assert (dreams.read_prg(0x8000), dreams.read_chr(0)) == (1, 100)
    assert dreams.name_table_mirroring() is NameTableMirroring.VERTICAL
    assert tally.count == 0


@pytest.mark.parametrize("prg, chr_bank", [(2, 3), (0, 1), (3, 0)])
def test_bank_select(dreams, tally, prg, chr_bank):
    dreams.write_prg(0x8000, (chr_bank << 4) | prg)
    assert (dreams.read_prg(0xFFFF), dreams.read_chr(0x1FFF)) == (prg + 1, chr_bank + 100)
    assert tally.count == 0


def test_out_of_range_reads_and_ignored_writes(dreams):
    dreams.write_chr(0, 0xFF)
    dreams.write_prg(0x6000, 0x33)
    assert [dreams.read_prg(0x7FFF), dreams.read_chr(0x2000)] == [0, 0]
    assert [dreams.read_chr(0), dreams.read_prg(0x8000)] == [100, 1]