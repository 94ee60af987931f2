"""iNES cartridge image loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from os import PathLike

log = logging.getLogger(__name__)

_HEADER_SIZE = 0x10
_MAGIC = b"NES\x1a"
_PRG_BANK_SIZE = 0x4000
_CHR_BANK_SIZE = 0x2000
_FOUR_SCREEN = 8


class RomError(ValueError):
    """Raised when a ROM image cannot be loaded."""


@dataclass
class Cartridge:
    """PRG and CHR contents plus the header information of a cartridge."""

    prg_rom: bytes = b""
    chr_rom: bytes = b""
    name_table_mirroring: int = 0
    mapper_number: int = 0
    extended_ram: bool = False

    def has_extended_ram(self) -> bool:
        """Work RAM at $6000-$7FFF is always provided."""
        return True

    @classmethod
    def from_bytes(cls, data: bytes) -> Cartridge:
        """Parse an iNES image held in memory."""
        data = bytes(data)
        if len(data) < _HEADER_SIZE:
            raise RomError("Reading iNES header failed.")
        header = data[:_HEADER_SIZE]

        if header[:4] != _MAGIC:
            raise RomError(f"Not a valid iNES image. Magic number: {header[:4]!r}")

        prg_banks = header[4]
        log.info("16KB PRG-ROM Banks: %d", prg_banks)
        if not prg_banks:
            raise RomError("ROM has no PRG-ROM banks. Loading ROM failed.")

        chr_banks = header[5]
        log.info("8KB CHR-ROM Banks: %d", chr_banks)

        if header[6] & 0x8:
            mirroring = _FOUR_SCREEN
            log.info("Name Table Mirroring: FourScreen")
        else:
            mirroring = header[6] & 0x1
            log.info("Name Table Mirroring: %s", "Horizontal" if mirroring == 0 else "Vertical")

        mapper_number = ((header[6] >> 4) & 0xF) | (header[7] & 0xF0)
        log.info("Mapper #: %d", mapper_number)

        extended_ram = bool(header[6] & 0x2)
        log.info("Extended (CPU) RAM: %s", extended_ram)

        if header[6] & 0x4:
            raise RomError("Trainer is not supported.")

        if (header[0xA] & 0x3) == 0x2 or (header[0xA] & 0x1):
            raise RomError("PAL ROM not supported.")
        log.info("ROM is NTSC compatible.")

        prg_end = _HEADER_SIZE + _PRG_BANK_SIZE * prg_banks
        if len(data) < prg_end:
            raise RomError("Reading PRG-ROM from image file failed.")
        prg_rom = data[_HEADER_SIZE:prg_end]

        chr_rom = b""
        if chr_banks:
            chr_end = prg_end + _CHR_BANK_SIZE * chr_banks
            if len(data) < chr_end:
                raise RomError("Reading CHR-ROM from image file failed.")
            chr_rom = data[prg_end:chr_end]
        else:
            log.info("Cartridge with CHR-RAM.")

        return cls(
            prg_rom=prg_rom,
            chr_rom=chr_rom,
            name_table_mirroring=mirroring,
            mapper_number=mapper_number,
            extended_ram=extended_ram,
        )

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> Cartridge:
        """Load an iNES image from a file."""
        try:
            with open(path, "rb") as rom_file:
                data = rom_file.read()
        except OSError as exc:
            raise RomError(f"Could not open ROM file from path: {path}") from exc
        log.info("Reading ROM from path: %s", path)
        return cls.from_bytes(data)