# simplenes

Building blocks of an NES emulator, in pure Python with no third-party
dependencies:

- `simplenes.cartridge` – reads and checks iNES (`.nes`) images.
- `simplenes.mapper` and the `mapper_*` modules – the cartridge mappers
  NROM (0), SxROM/MMC1 (1), UxROM (2), CNROM (3), MMC3 (4), AxROM (7),
  Color Dreams (11) and GxROM (66).
- `simplenes.mapper_factory` – builds the mapper a cartridge asks for.
- `simplenes.main_bus` – the CPU address bus (internal RAM, I/O register
  handlers, work RAM at `$6000-$7FFF`, cartridge space).
- `simplenes.picture_bus` – the PPU address bus (pattern tables through the
  mapper, name tables with mirroring, palette memory).
- `simplenes.cpu` – the 6502 CPU, stepped one cycle at a time.
- `simplenes.opcodes` – opcode enumerations, masks and the cycle table.
- `simplenes.controller` – the standard joypad shift register.
- `simplenes.keybindings` – default key bindings and the keybindings file parser.
- `simplenes.screen` – a frame buffer of scaled virtual pixels.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Loading a cartridge and running the CPU

```python
from simplenes.cartridge import Cartridge, RomError
from simplenes.cpu import CPU
from simplenes.main_bus import MainBus
from simplenes.mapper_factory import create_mapper
from simplenes.opcodes import InterruptType
from simplenes.picture_bus import PictureBus

cartridge = Cartridge.from_file("game.nes")   # raises RomError on a bad image

bus = MainBus()
picture_bus = PictureBus()
cpu = CPU(bus)

mapper = create_mapper(
    cartridge.mapper_number,
    cartridge,
    lambda: cpu.interrupt(InterruptType.IRQ),
    picture_bus.update_mirroring,
)
if mapper is None:
    raise SystemExit("unsupported mapper")

bus.set_mapper(mapper)
picture_bus.set_mapper(mapper)

cpu.reset()          # start at the reset vector; cpu.reset(0xC000) starts elsewhere
for _ in range(1000):
    cpu.step()       # one CPU cycle
```

`Cartridge.from_bytes` parses an image already in memory. Images with a
trainer, PAL images and images without PRG-ROM are rejected with `RomError`.

I/O registers are wired with `MainBus.set_read_callback` and
`MainBus.set_write_callback`, keyed by `IORegister` (for example
`IORegister.JOY1`); registering the same register twice raises `ValueError`.
`MainBus.page(n)` returns the 256 bytes of a CPU page, as an OAM DMA copy
would read them.

With the `simplenes.cpu.trace` logger enabled at `DEBUG`, the CPU logs one
trace line per instruction (PC, opcode, A, X, Y, P, SP and the cycle count).

## Joypads and key bindings

```python
from simplenes.controller import Controller
from simplenes.keybindings import default_bindings, parse_controller_conf

player1, player2 = default_bindings()
player1, player2 = parse_controller_conf("keybindings.conf", player1, player2)

pressed = {"J"}
pad = Controller(lambda key: key in pressed)
pad.set_key_bindings(player1)
pad.strobe(1)
pad.strobe(0)        # latch the buttons
bits = [pad.read() & 1 for _ in range(8)]   # A, B, Select, Start, Up, Down, Left, Right
```

Default keys:

| Button | Player 1 | Player 2 |
|--------|----------|----------|
| A      | J        | Numpad5  |
| B      | K        | Numpad6  |
| Select | RShift   | Numpad8  |
| Start  | Return   | Numpad9  |
| Up     | W        | Up       |
| Down   | S        | Down     |
| Left   | A        | Left     |
| Right  | D        | Right    |

The keybindings file:

```
# Lines starting with '#' are comments
[Player1]
A = J
B = K
Select = RShift
Start = Return

[Player2]
Up = Up
Down = Down
```

Key names are those in `simplenes.keybindings.KEY_NAMES`: the letters
`A`–`Z`, `Num0`–`Num9`, `Numpad0`–`Numpad9`, `F1`–`F15`, the arrows and keys
such as `Space`, `Return`, `Tab`, `LShift`, `RShift`. Lines with an unknown
button or key are logged and skipped; a file that cannot be opened leaves the
bindings unchanged.

## Frame buffer

`VirtualScreen.create(width, height, pixel_size, color)` allocates the
buffer, `set_pixel` and `pixel` write and read it, and `draw(surface)`
paints every virtual pixel as a `pixel_size` square by calling
`surface.fill(color, (x, y, w, h))` on any object that provides it.

## What this package does not do

There is no picture processing unit, so nothing renders frames into the
screen buffer; there is no window, no event loop, no command-line program and
no audio. The package provides the cartridge, mapper, bus, CPU and input
parts for a program that supplies those.