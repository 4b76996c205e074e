#  Copyright 2022 Nicolas Maltais
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

# Memory maps of the supported chips.
# RAM regions are fixed for a chip. Flash-mapped regions are cache windows onto the
# external flash, so they only extend as far as the flash chip does, up to the size
# of the window itself.

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from memviz.types import RegionKind, MemoryRegion, UnsupportedChipError, MissingFlashSizeError


def KB(v: int) -> int:
    return v * 1024


def MB(v: int) -> int:
    return v * 1024 * 1024


class Chip(Enum):
    ESP8266 = "esp8266"
    ESP32 = "esp32"
    ESP32S2 = "esp32s2"
    ESP32S3 = "esp32s3"
    ESP32C2 = "esp32c2"
    ESP32C3 = "esp32c3"

    @staticmethod
    def parse(name: str) -> "Chip":
        """Parse chip name, ignoring case and `-`/`_` separators ("ESP32-C3" is esp32c3)."""
        key = re.sub(r"[-_\s]", "", name).lower()
        for chip in Chip:
            if chip.value == key:
                return chip
        raise UnsupportedChipError(f"unsupported chip '{name}' "
                                   f"(supported: {', '.join(c.value for c in Chip)})")


class FlashSize(Enum):
    KB_256 = KB(256)
    KB_512 = KB(512)
    MB_1 = MB(1)
    MB_2 = MB(2)
    MB_4 = MB(4)
    MB_8 = MB(8)
    MB_16 = MB(16)
    MB_32 = MB(32)
    MB_64 = MB(64)
    MB_128 = MB(128)
    MB_256 = MB(256)

    @property
    def label(self) -> str:
        unit, count = self.name.split("_")
        return f"{count}{unit}"

    @staticmethod
    def parse(s: str) -> "FlashSize":
        """Parse flash size label, e.g. "4MB", "4m" or "256KB"."""
        match = re.fullmatch(r"(\d+)\s*([km])b?", s.strip().lower())
        if match:
            name = f"{match.group(2).upper()}B_{int(match.group(1))}"
            if name in FlashSize.__members__:
                return FlashSize[name]
        raise ValueError(f"invalid flash size '{s}' "
                         f"(valid: {', '.join(f.label for f in FlashSize)})")


# used when no flash size is given for a chip with flash-mapped regions
DEFAULT_FLASH_SIZE = FlashSize.MB_4


@dataclass(frozen=True)
class ChipProfile:
    chip: Chip
    # (kind, start, size)
    fixed: Tuple[Tuple[RegionKind, int, int], ...]
    # (kind, start, maximum mapped size)
    flash_mapped: Tuple[Tuple[RegionKind, int, int], ...] = ()

    @property
    def has_flash_mapped(self) -> bool:
        return bool(self.flash_mapped)

    def regions(self, flash_size: FlashSize) -> List[MemoryRegion]:
        regions = [MemoryRegion(kind, start, start + size) for kind, start, size in self.fixed]
        for kind, start, window in self.flash_mapped:
            regions.append(MemoryRegion(kind, start, start + min(flash_size.value, window)))
        # stable sort, regions of the same kind keep their table order
        regions.sort(key=lambda r: r.kind.order)
        return regions


PROFILES: Dict[Chip, ChipProfile] = {p.chip: p for p in [
    ChipProfile(
        Chip.ESP8266,
        fixed=((RegionKind.DRAM, 0x3FFE8000, KB(80)),
               (RegionKind.IRAM, 0x40100000, KB(32))),
        flash_mapped=((RegionKind.FLASH, 0x40200000, MB(1)),)),
    ChipProfile(
        Chip.ESP32,
        fixed=((RegionKind.DRAM, 0x3FFB0000, KB(176)),
               (RegionKind.IRAM, 0x40080000, KB(128))),
        flash_mapped=((RegionKind.DROM, 0x3F400000, MB(4)),
                      (RegionKind.IROM, 0x400D0000, 0x330000))),
    ChipProfile(
        Chip.ESP32S2,
        fixed=((RegionKind.DRAM, 0x3FFB0000, KB(320)),
               (RegionKind.IRAM, 0x40020000, KB(320))),
        flash_mapped=((RegionKind.DROM, 0x3F000000, MB(4)),
                      (RegionKind.IROM, 0x40080000, 0x780000))),
    ChipProfile(
        Chip.ESP32S3,
        fixed=((RegionKind.DRAM, 0x3FC88000, KB(416)),
               (RegionKind.IRAM, 0x40378000, KB(416))),
        flash_mapped=((RegionKind.DROM, 0x3C000000, MB(32)),
                      (RegionKind.IROM, 0x42000000, MB(32)))),
    ChipProfile(
        Chip.ESP32C2,
        fixed=((RegionKind.DRAM, 0x3FCA0000, KB(256)),
               (RegionKind.IRAM, 0x4037C000, KB(272))),
        flash_mapped=((RegionKind.DROM, 0x3C000000, MB(4)),
                      (RegionKind.IROM, 0x42000000, MB(4)))),
    ChipProfile(
        Chip.ESP32C3,
        fixed=((RegionKind.DRAM, 0x3FC80000, KB(320)),
               (RegionKind.IRAM, 0x4037C000, KB(400))),
        flash_mapped=((RegionKind.DROM, 0x3C000000, MB(8)),
                      (RegionKind.IROM, 0x42000000, MB(8)))),
]}


def regions_for(chip: Union[Chip, str], flash_size: Optional[FlashSize] = None,
                require_flash_size: bool = False) -> List[MemoryRegion]:
    """Returns the memory regions of a `chip` in display order. Flash-mapped regions are
    sized for `flash_size`, or for DEFAULT_FLASH_SIZE if not given, unless `require_flash_size`
    is set in which case a missing flash size is an error."""
    if not isinstance(chip, Chip):
        chip = Chip.parse(chip)
    profile = PROFILES.get(chip)
    if profile is None:
        raise UnsupportedChipError(f"no memory map for chip '{chip.value}'")

    if flash_size is None:
        if require_flash_size and profile.has_flash_mapped:
            raise MissingFlashSizeError(f"chip '{chip.value}' has flash-mapped regions, "
                                        f"a flash size is required")
        flash_size = DEFAULT_FLASH_SIZE
    return profile.regions(flash_size)
