"""NES emulation core: cartridges, mappers, buses, joypads, 6502 CPU and a frame buffer."""

__version__ = "0.1.0"