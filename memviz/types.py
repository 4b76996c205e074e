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

from dataclasses import dataclass
from enum import Enum


class MemvizError(Exception):
    """Base error, `exit_code` is the process exit status used when it aborts a run."""
    exit_code = 1


class UnsupportedChipError(MemvizError):
    exit_code = 3


class MissingFlashSizeError(MemvizError):
    exit_code = 4


class FileReadError(MemvizError):
    exit_code = 5


class DecodeError(MemvizError):
    exit_code = 6


class RegionKind(Enum):
    """Memory region role, value is the printed label.
    Declaration order is the order in which regions are displayed."""
    DROM = "DROM"
    FLASH = "FLASH"
    DRAM = "DRAM"
    IRAM = "IRAM"
    IROM = "IROM"

    @property
    def order(self) -> int:
        return list(RegionKind).index(self)


@dataclass(frozen=True)
class MemoryRegion:
    kind: RegionKind
    start: int
    end: int

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"empty region {self.kind.value} "
                             f"[0x{self.start:08x}, 0x{self.end:08x})")

    @property
    def span(self) -> int:
        return self.end - self.start

    def contains(self, address: int) -> bool:
        return self.start <= address < self.end

    def __repr__(self) -> str:
        return f"{self.kind.value} [0x{self.start:08x}, 0x{self.end:08x})"


@dataclass(frozen=True)
class Section:
    """ELF section as decoded from the section header table."""
    name: str
    address: int
    size: int
    section_type: str = ""


@dataclass(frozen=True)
class ClassifiedSection:
    section: Section
    region: MemoryRegion

    @property
    def name(self) -> str:
        return self.section.name

    @property
    def address(self) -> int:
        return self.section.address

    @property
    def size(self) -> int:
        return self.section.size


@dataclass(frozen=True)
class BarRow:
    label: str
    address: int
    size: int
    region_kind: RegionKind
    bar: str
