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

# Text rendering of classified sections. Each section gets a bar showing its position
# and extent relative to the whole span of its region, e.g. at width 20:
#
#   .flash.text  42000020  123456 IROM  [████████            ]
#   .flash.appde 3c000020     256 DROM  [▏                   ]
#
# Sizes are rounded to whole characters so two sections of different sizes may get
# bars of the same width. Every non-empty section gets at least one character.

from typing import Iterator, List, Tuple

from memviz.classify import Classification
from memviz.types import ClassifiedSection, MemoryRegion, BarRow
from memviz.utils import readable_size

DEFAULT_WIDTH = 120
LABEL_WIDTH = 12

BAR_FULL = "█"
BAR_SMALL = "▏"
BAR_EMPTY = " "


def bar_extent(address: int, size: int, region: MemoryRegion, width: int) -> Tuple[int, int, bool]:
    """Returns the (offset, length) in characters of a section bar, and whether the section is
    too small to be shown at that scale. Integer arithmetic only, to stay exact for any span."""
    span = region.span
    offset = (address - region.start) * width // span
    offset = max(0, min(offset, width - 1))

    # round half up
    length = (2 * size * width + span) // (2 * span)
    small = length == 0
    if small:
        length = 1
    length = min(length, width - offset)
    return offset, length, small


def render_bar(address: int, size: int, region: MemoryRegion, width: int) -> str:
    offset, length, small = bar_extent(address, size, region, width)
    glyph = BAR_SMALL if small else BAR_FULL
    return BAR_EMPTY * offset + glyph * length + BAR_EMPTY * (width - offset - length)


def render_row(section: ClassifiedSection, region: MemoryRegion, width: int) -> BarRow:
    if width < 1:
        raise ValueError("bar width must be at least 1")
    return BarRow(section.name, section.address, section.size, region.kind,
                  render_bar(section.address, section.size, region, width))


def format_row(row: BarRow, label_width: int = LABEL_WIDTH) -> str:
    label = row.label[:label_width]
    return (f"{label:<{label_width}} {row.address:8x} {row.size:7} "
            f"{row.region_kind.value:5} [{row.bar}]")


def render(classification: Classification, width: int = DEFAULT_WIDTH,
           label_width: int = LABEL_WIDTH) -> Iterator[str]:
    """Yields one block of lines per occupied region, in display order."""
    for sections in classification.values():
        yield "\n".join(format_row(render_row(s, s.region, width), label_width)
                        for s in sections)


def render_text(classification: Classification, width: int = DEFAULT_WIDTH,
                label_width: int = LABEL_WIDTH) -> str:
    """Full report, with blocks separated by a blank line."""
    return "\n\n".join(render(classification, width, label_width))


def region_usage(classification: Classification) -> List[Tuple[MemoryRegion, int]]:
    """Returns a (region, used bytes) pair for each occupied region. Regions of the same
    kind are reported separately. Sections overlapping each other are counted twice."""
    usage: List[Tuple[MemoryRegion, int]] = []
    for sections in classification.values():
        totals = {}
        for s in sections:
            totals[s.region] = totals.get(s.region, 0) + s.size
        usage.extend(totals.items())
    return usage


def render_summary(classification: Classification) -> str:
    lines = ["Region   Used size   Region size   % used"]
    for region, used in region_usage(classification):
        lines.append(f"{region.kind.value:<6}   {used:>7} B   {region.span:>9} B   "
                     f"{used / region.span:>6.1%}   ({readable_size(used)} / "
                     f"{readable_size(region.span)})")
    return "\n".join(lines)
