import struct
from pathlib import Path
from typing import List, Tuple

import pytest

SHT_PROGBITS = 1
SHT_STRTAB = 3
SHT_NOBITS = 8

SHF_WRITE = 0x1
SHF_ALLOC = 0x2
SHF_EXECINSTR = 0x4

EM_XTENSA = 94
EM_RISCV = 243

# (name, type, flags, address, size)
SectionSpec = Tuple[str, int, int, int, int]

ESP32C3_SECTIONS: List[SectionSpec] = [
    (".flash.appdesc", SHT_PROGBITS, SHF_ALLOC, 0x3C000020, 0x100),
    (".flash.rodata", SHT_PROGBITS, SHF_ALLOC, 0x3C000120, 0x4000),
    (".dram0.data", SHT_PROGBITS, SHF_ALLOC | SHF_WRITE, 0x3FC80000, 0x800),
    (".dram0.bss", SHT_NOBITS, SHF_ALLOC | SHF_WRITE, 0x3FC80800, 0x2000),
    (".iram0.text", SHT_PROGBITS, SHF_ALLOC | SHF_EXECINSTR, 0x4037C000, 0x1000),
    (".flash.text", SHT_PROGBITS, SHF_ALLOC | SHF_EXECINSTR, 0x42000020, 0x20000),
    (".rtc.text", SHT_PROGBITS, SHF_ALLOC | SHF_EXECINSTR, 0x50000000, 0x10),
    (".comment", SHT_PROGBITS, 0, 0, 0x20),
]


def build_elf(sections: List[SectionSpec], machine: int = EM_RISCV) -> bytes:
    """Build a minimal little-endian ELF32 image with a section header table.
    Section contents are zero-filled, NOBITS sections take no space in the file."""
    names = b"\x00"
    name_offsets = []
    for name, *_ in sections:
        name_offsets.append(len(names))
        names += name.encode("ascii") + b"\x00"
    shstrtab_name = len(names)
    names += b".shstrtab\x00"

    header_size = 52
    data = bytearray()
    headers = [bytes(40)]  # null section
    for (name, sh_type, flags, address, size), name_offset in zip(sections, name_offsets):
        offset = header_size + len(data)
        if sh_type != SHT_NOBITS:
            data += bytes(size)
        headers.append(struct.pack("<10I", name_offset, sh_type, flags, address,
                                   offset, size, 0, 0, 4, 0))
    headers.append(struct.pack("<10I", shstrtab_name, SHT_STRTAB, 0, 0,
                               header_size + len(data), len(names), 0, 0, 1, 0))
    data += names
    data += bytes(-len(data) % 4)

    shoff = header_size + len(data)
    ident = b"\x7fELF" + bytes([1, 1, 1]) + bytes(9)
    header = ident + struct.pack("<HHIIIIIHHHHHH", 2, machine, 1, 0, 0, shoff, 0,
                                 header_size, 32, 0, 40, len(headers), len(headers) - 1)
    return header + bytes(data) + b"".join(headers)


@pytest.fixture
def elf_file(tmp_path: Path) -> Path:
    path = tmp_path / "firmware.elf"
    path.write_bytes(build_elf(ESP32C3_SECTIONS))
    return path
