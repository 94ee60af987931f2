from simplenes.cartridge import Cartridge
from simplenes.mapper import NameTableMirroring
from simplenes.mapper_gxrom import MapperGxROM

GX_PRG = b"".join(bytes([n + 1]) * 0x8000 for n in range(4))
GX_CHR = b"".join(bytes([n + 50]) * 0x2000 for n in range(4))


def _gxrom():
    events = []
    return MapperGxROM(Cartridge(prg_rom=GX_PRG, chr_rom=GX_CHR), lambda: events.append("update")), events


def test_defaults():
    gx, _ = _gxrom()
    assert (gx.read_prg(0x8000), gx.read_chr(0), gx.name_table_mirroring()) == (
        1,
        50,
        NameTableMirroring.VERTICAL,
    )


def test_bank_select():
    gx, events = _gxrom()
    gx.write_prg(0x8000, 0x21)
    assert (gx.prg_bank, gx.chr_bank) == (2, 1)
    assert (gx.read_prg(0x8000), gx.read_chr(0x1000)) == (3, 51)
    assert events == ["update"]


def test_callback_runs_even_for_low_writes():
    gx, events = _gxrom()
    gx.write_prg(0x6000, 0x33)
    assert events == ["update"]
    assert (gx.prg_bank, gx.chr_bank) == (0, 0)


def test_out_of_range_and_chr_writes():
    gx, _ = _gxrom()
    gx.write_chr(0, 0)
    assert [gx.read_prg(0x4020), gx.read_chr(0x2000), gx.read_chr(0)] == [0, 0, 50]