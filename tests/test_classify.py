from memviz.chips import Chip, FlashSize, regions_for
from memviz.classify import classify, unclassified, find_region
from memviz.types import Section, MemoryRegion, RegionKind

REGIONS = [
    MemoryRegion(RegionKind.DROM, 0x1000, 0x2000),
    MemoryRegion(RegionKind.DRAM, 0x3000, 0x4000),
    MemoryRegion(RegionKind.IRAM, 0x5000, 0x6000),
]


def test_zero_size_sections_dropped():
    sections = [Section(".empty", 0x1000, 0), Section(".data", 0x3000, 0x10),
                Section(".empty2", 0x3010, 0)]
    result = classify(sections, REGIONS)
    names = [s.name for group in result.values() for s in group]
    assert names == [".data"]


def test_section_assigned_to_containing_region():
    section = Section(".text", 0x5800, 0x100)
    result = classify([section], REGIONS)
    assert list(result) == [RegionKind.IRAM]
    assert result[RegionKind.IRAM][0].section == section
    assert result[RegionKind.IRAM][0].region == REGIONS[2]


def test_region_bounds():
    # start is inclusive, end is exclusive
    assert find_region(0x1000, REGIONS) == REGIONS[0]
    assert find_region(0x1fff, REGIONS) == REGIONS[0]
    assert find_region(0x2000, REGIONS) is None


def test_classified_by_start_address_only():
    # section spills over the end of its region, it still belongs to it
    result = classify([Section(".big", 0x1f00, 0x4000)], REGIONS)
    assert list(result) == [RegionKind.DROM]


def test_outside_sections_dropped():
    sections = [Section(".rtc", 0x9000, 0x10), Section(".data", 0x3000, 0x10)]
    assert list(classify(sections, REGIONS)) == [RegionKind.DRAM]
    assert unclassified(sections, REGIONS) == [sections[0]]


def test_empty_regions_omitted():
    assert classify([], REGIONS) == {}
    assert classify([Section(".x", 0x9000, 1)], REGIONS) == {}


def test_input_order_kept():
    sections = [Section(".b", 0x3800, 0x10), Section(".a", 0x3000, 0x10),
                Section(".c", 0x3400, 0x10)]
    result = classify(sections, REGIONS)
    assert [s.name for s in result[RegionKind.DRAM]] == [".b", ".a", ".c"]


def test_display_order_of_regions():
    sections = [Section(".iram", 0x5000, 0x10), Section(".dram", 0x3000, 0x10),
                Section(".drom", 0x1000, 0x10)]
    result = classify(sections, REGIONS)
    assert list(result) == [RegionKind.DROM, RegionKind.DRAM, RegionKind.IRAM]


def test_overlapping_regions_first_wins():
    regions = [MemoryRegion(RegionKind.DRAM, 0x0, 0x2000),
               MemoryRegion(RegionKind.IRAM, 0x1000, 0x3000)]
    result = classify([Section(".x", 0x1800, 4)], regions)
    assert list(result) == [RegionKind.DRAM]


def test_aliases_both_kept():
    sections = [Section(".dram0.data", 0x3000, 0x100), Section(".alias", 0x3000, 0x40)]
    result = classify(sections, REGIONS)
    assert [s.name for s in result[RegionKind.DRAM]] == [".dram0.data", ".alias"]


def test_real_chip_table():
    regions = regions_for(Chip.ESP32, FlashSize.MB_4)
    sections = [
        Section(".flash.text", 0x400D0020, 0x12345),
        Section(".dram0.bss", 0x3FFB2000, 0x800),
        Section(".flash.rodata", 0x3F400020, 0x5000),
        Section(".iram0.vectors", 0x40080000, 0x400),
    ]
    result = classify(sections, regions)
    assert list(result) == [RegionKind.DROM, RegionKind.DRAM, RegionKind.IRAM, RegionKind.IROM]
    assert result[RegionKind.IROM][0].name == ".flash.text"
