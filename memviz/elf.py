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

from typing import List

from elftools.common.exceptions import ELFError
from elftools.elf.constants import SH_FLAGS
from elftools.elf.elffile import ELFFile

from memviz.types import Section, FileReadError, DecodeError
from memviz.utils import PathLike


def read_sections(filename: PathLike) -> List[Section]:
    """Read the section header table of an ELF file. Only sections occupying memory on
    the target are returned (allocated, non-zero address), in section table order."""
    try:
        file = open(filename, "rb")
    except OSError as e:
        raise FileReadError(f"ELF file couldn't be opened: {e}")

    with file:
        try:
            elf = ELFFile(file)
            sections = []
            for section in elf.iter_sections():
                if not section["sh_flags"] & SH_FLAGS.SHF_ALLOC or section["sh_addr"] == 0:
                    continue
                sections.append(Section(section.name, section["sh_addr"],
                                        section["sh_size"], section["sh_type"]))
        except ELFError as e:
            raise DecodeError(f"invalid ELF file: {e}")
        except OSError as e:
            raise FileReadError(f"ELF file couldn't be read: {e}")
    return sections
