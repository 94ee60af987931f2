[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simplenes"
version = "0.1.0"
description = "NES emulation core: iNES cartridge loading, cartridge mappers, memory buses, joypads and the 6502 CPU."
requires-python = ">=3.10"
keywords = ["nes", "emulator", "6502", "ines", "famicom", "mapper"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: System :: Emulators",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["simplenes"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
