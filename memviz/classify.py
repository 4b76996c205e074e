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

from typing import Dict, List, Optional, Sequence

from memviz.types import Section, MemoryRegion, ClassifiedSection, RegionKind

Classification = Dict[RegionKind, List[ClassifiedSection]]


def find_region(address: int, regions: Sequence[MemoryRegion]) -> Optional[MemoryRegion]:
    """Returns the first region containing `address`, in table order."""
    for region in regions:
        if region.contains(address):
            return region
    return None


def classify(sections: Sequence[Section], regions: Sequence[MemoryRegion]) -> Classification:
    """Assign each non-empty section to the region containing its start address.
    Sections outside of all regions are dropped, as are regions left empty.
    Sections keep their input order within a region, aliases at the same address included."""
    by_kind: Classification = {}
    for section in sections:
        if section.size == 0:
            continue
        region = find_region(section.address, regions)
        if region is None:
            continue
        by_kind.setdefault(region.kind, []).append(ClassifiedSection(section, region))

    # iterate in display order regardless of the order in which regions were first hit
    return {kind: by_kind[kind] for kind in sorted(by_kind, key=lambda k: k.order)}


def unclassified(sections: Sequence[Section], regions: Sequence[MemoryRegion]) -> List[Section]:
    """Returns the non-empty sections that don't fall in any region."""
    return [s for s in sections if s.size != 0 and find_region(s.address, regions) is None]
