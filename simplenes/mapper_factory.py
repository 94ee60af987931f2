"""Construction of the mapper a cartridge asks for."""

from __future__ import annotations

from typing import Callable

from simplenes.cartridge import Cartridge
from simplenes.mapper import Mapper, MapperType
from simplenes.mapper_axrom import MapperAxROM
from simplenes.mapper_cnrom import MapperCNROM
from simplenes.mapper_colordreams import MapperColorDreams
from simplenes.mapper_gxrom import MapperGxROM
from simplenes.mapper_mmc3 import MapperMMC3
from simplenes.mapper_nrom import MapperNROM
from simplenes.mapper_sxrom import MapperSxROM
from simplenes.mapper_uxrom import MapperUxROM


def create_mapper(
    mapper_type: int,
    cartridge: Cartridge,
    interrupt_callback: Callable[[], None],
    mirroring_callback: Callable[[], None],
) -> Mapper | None:
    """Return a mapper for the given type number, or None if it is unsupported."""
    try:
        kind = MapperType(mapper_type)
    except ValueError:
        return None

    if kind is MapperType.NROM:
        return MapperNROM(cartridge)
    if kind is MapperType.SXROM:
        return MapperSxROM(cartridge, mirroring_callback)
    if kind is MapperType.UXROM:
        return MapperUxROM(cartridge)
    if kind is MapperType.CNROM:
        return MapperCNROM(cartridge)
    if kind is MapperType.MMC3:
        return MapperMMC3(cartridge, interrupt_callback, mirroring_callback)
    if kind is MapperType.AXROM:
        return MapperAxROM(cartridge, mirroring_callback)
    if kind is MapperType.COLOR_DREAMS:
        return MapperColorDreams(cartridge, mirroring_callback)
    if kind is MapperType.GXROM:
        return MapperGxROM(cartridge, mirroring_callback)
    return None