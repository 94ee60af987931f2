"""Mapper 4 (MMC3): 8KB PRG and 1KB CHR banking with a scanline IRQ counter."""

from typing import Callable

from simplenes.cartridge import Cartridge
from simplenes.mapper import Mapper, MapperType, NameTableMirroring


class MapperMMC3(Mapper):
    def __init__(
        self,
        cartridge: Cartridge,
        interrupt_callback: Callable[[], None],
        mirroring_callback: Callable[[], None],
    ) -> None:
        super().__init__(cartridge, MapperType.MMC3)
        self._target_register = 0
        self._prg_bank_mode = False
        self._chr_inversion = False
        self._bank_register = [0] * 8

        self._irq_enabled = False
        self._irq_counter = 0
        self._irq_latch = 0
        self._irq_reload_pending = False

        self._prg_ram = bytearray(32 * 1024)
        self._mirroring_ram = bytearray(4 * 1024)

        prg_size = len(cartridge.prg_rom)
        self._prg_banks = [prg_size - 0x4000, prg_size - 0x2000, prg_size - 0x4000, prg_size - 0x2000]

        chr_size = len(cartridge.chr_rom)
        self._chr_banks = [chr_size - 0x400] * 8
        self._chr_banks[0] = chr_size - 0x800
        self._chr_banks[3] = chr_size - 0x800

        self._mirroring = NameTableMirroring.HORIZONTAL
        self._mirroring_callback = mirroring_callback
        self._interrupt_callback = interrupt_callback

    def read_prg(self, address: int) -> int:
        if 0x6000 <= address <= 0x7FFF:
            return self._prg_ram[address & 0x1FFF]
        if address >= 0x8000:
            bank = self._prg_banks[(address - 0x8000) >> 13]
            return self.cartridge.prg_rom[bank + (address & 0x1FFF)]
        return 0

    def read_chr(self, address: int) -> int:
        if address <= 0x1FFF:
            base = self._chr_banks[address >> 10]
            return self.cartridge.chr_rom[base + (address & 0x3FF)]
        if address <= 0x2FFF:
            return self._mirroring_ram[address - 0x2000]
        return 0

    def write_prg(self, address: int, value: int) -> None:
        value &= 0xFF
        if 0x6000 <= address <= 0x7FFF:
            self._prg_ram[address & 0x1FFF] = value
        elif 0x8000 <= address <= 0x9FFF:
            if not address & 0x01:
                self._target_register = value & 0x7
                self._prg_bank_mode = bool(value & 0x40)
                self._chr_inversion = bool(value & 0x80)
            else:
                self._bank_register[self._target_register] = value
                self._update_banks()
        elif 0xA000 <= address <= 0xBFFF:
            if not address & 0x01:
                if self.cartridge.name_table_mirroring & 0x8:
                    self._mirroring = NameTableMirroring.FOUR_SCREEN
                elif value & 0x01:
                    self._mirroring = NameTableMirroring.HORIZONTAL
                else:
                    self._mirroring = NameTableMirroring.VERTICAL
                self._mirroring_callback()
            # Odd addresses are PRG RAM protect, which is ignored.
        elif 0xC000 <= address <= 0xDFFF:
            if not address & 0x01:
                self._irq_latch = value
            else:
                self._irq_counter = 0
                self._irq_reload_pending = True
        elif address >= 0xE000:
            self._irq_enabled = (address & 0x01) == 0x01

    def _update_banks(self) -> None:
        regs = self._bank_register
        pair0 = (regs[0] & 0xFE) * 0x400
        pair1 = (regs[1] & 0xFE) * 0x400
        pairs = [pair0, pair0 + 0x400, pair1, pair1 + 0x400]
        singles = [regs[i] * 0x400 for i in range(2, 6)]
        self._chr_banks = singles + pairs if self._chr_inversion else pairs + singles

        prg_size = len(self.cartridge.prg_rom)
        r6 = (regs[6] & 0x3F) * 0x2000
        r7 = (regs[7] & 0x3F) * 0x2000
        if self._prg_bank_mode:
            self._prg_banks = [prg_size - 0x4000, r7, r6, prg_size - 0x2000]
        else:
            self._prg_banks = [r6, r7, prg_size - 0x4000, prg_size - 0x2000]

    def write_chr(self, address: int, value: int) -> None:
        if 0x2000 <= address <= 0x2FFF:
            self._mirroring_ram[address - 0x2000] = value & 0xFF

    def scanline_irq(self) -> None:
        zero_transition = False
        if self._irq_counter == 0 or self._irq_reload_pending:
            self._irq_counter = self._irq_latch
            self._irq_reload_pending = False
        else:
            self._irq_counter = (self._irq_counter - 1) & 0xFF
            zero_transition = self._irq_counter == 0

        if zero_transition and self._irq_enabled:
            self._interrupt_callback()

    def name_table_mirroring(self) -> NameTableMirroring:
        return self._mirroring