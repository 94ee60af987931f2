"""PPU address bus: pattern tables, name tables and palette memory."""

from __future__ import annotations

import logging

from simplenes.mapper import Mapper, NameTableMirroring

log = logging.getLogger(__name__)


class PictureBus:
    """Routes PPU reads and writes to the mapper, name table RAM and palette."""

    def __init__(self) -> None:
        self._mapper: Mapper | None = None
        self._ram = bytearray(0x800)
        self._palette = bytearray(0x20)
        self._name_tables = [0, 0, 0, 0]

    def _require_mapper(self) -> Mapper:
        if self._mapper is None:
            raise RuntimeError("No mapper has been set on the picture bus")
        return self._mapper

    def set_mapper(self, mapper: Mapper) -> None:
        if mapper is None:
            raise ValueError("Mapper is None")
        self._mapper = mapper
        self.update_mirroring()

    def scanline_irq(self) -> None:
        self._require_mapper().scanline_irq()

    def update_mirroring(self) -> None:
        """Re-map the four logical name tables after a mirroring change."""
        mirroring = self._require_mapper().name_table_mirroring()
        tables = self._name_tables
        if mirroring == NameTableMirroring.VERTICAL:
            tables[:] = [0, 0x400, 0, 0x400]
            log.debug("Vertical Name Table mirroring set. (Horizontal Scrolling)")
        elif mirroring == NameTableMirroring.HORIZONTAL:
            tables[:] = [0, 0, 0x400, 0x400]
            log.debug("Horizontal Name Table mirroring set. (Vertical Scrolling)")
        elif mirroring == NameTableMirroring.FOUR_SCREEN:
            tables[0] = len(self._ram)
            log.debug("FourScreen mirroring.")
        elif mirroring == NameTableMirroring.ONE_SCREEN_LOWER:
            tables[:] = [0, 0, 0, 0]
            log.debug("Single Screen mirroring set with lower bank.")
        elif mirroring == NameTableMirroring.ONE_SCREEN_HIGHER:
            tables[:] = [0x400, 0x400, 0x400, 0x400]
            log.debug("Single Screen mirroring set with higher bank.")
        else:
            tables[:] = [0, 0, 0, 0]
            log.error("Unsupported Name Table mirroring : %s", mirroring)

    def read_palette(self, palette_address: int) -> int:
        if palette_address >= 0x10 and palette_address % 4 == 0:
            palette_address &= 0xF
        return self._palette[palette_address]

    def _name_table_slot(self, address: int) -> tuple[int, int] | None:
        """Return (ram index, normalized address); index is None for four-screen."""
        normalized = address - 0x1000 if address >= 0x3000 else address
        if self._name_tables[0] >= len(self._ram):
            return None
        table = (normalized - 0x2000) >> 10
        return self._name_tables[table] + (address & 0x3FF), normalized

    def read(self, address: int) -> int:
        address &= 0x3FFF
        if address <= 0x1FFF:
            return self._require_mapper().read_chr(address)
        if address >= 0x3F00:
            return self.read_palette(address & 0x1F)
        slot = self._name_table_slot(address)
        if slot is None:
            normalized = address - 0x1000 if address >= 0x3000 else address
            return self._require_mapper().read_chr(normalized)
        return self._ram[slot[0]]

    def write(self, address: int, value: int) -> None:
        address &= 0x3FFF
        value &= 0xFF
        if address <= 0x1FFF:
            self._require_mapper().write_chr(address, value)
        elif address >= 0x3F00:
            palette = address & 0x1F
            if palette >= 0x10 and address % 4 == 0:
                palette &= 0xF
            self._palette[palette] = value
        else:
            slot = self._name_table_slot(address)
            if slot is None:
                normalized = address - 0x1000 if address >= 0x3000 else address
                self._require_mapper().write_chr(normalized, value)
            else:
                self._ram[slot[0]] = value