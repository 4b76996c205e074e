#!/usr/bin/env python3

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

# Command line program showing how the sections of a firmware ELF file are laid out
# in the memory regions of an Espressif chip. One block is printed per occupied region,
# with a row per section and a bar showing where the section sits in the region.
#
# Usage:
#  memviz --help
#  memviz -c esp32c3 firmware.elf
#  memviz -c ESP32-S3 -f 16MB -w 80 --summary firmware.elf

import argparse
import sys
from typing import List, Optional

import colorama

from memviz import __version__
from memviz.chips import Chip, FlashSize, DEFAULT_FLASH_SIZE, regions_for
from memviz.classify import classify, unclassified
from memviz.elf import read_sections
from memviz.render import DEFAULT_WIDTH, render_text, render_summary
from memviz.types import MemvizError
from memviz.utils import print_status, print_error


def flash_size_arg(s: str) -> FlashSize:
    try:
        return FlashSize.parse(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def width_arg(s: str) -> int:
    try:
        width = int(s, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid width '{s}'")
    if width < 1:
        raise argparse.ArgumentTypeError("width must be at least 1")
    return width


parser = argparse.ArgumentParser(
    prog="memviz", description="Show the memory layout of an Espressif firmware ELF file")
parser.add_argument(
    "file", action="store", type=str,
    help="ELF file to inspect")
parser.add_argument(
    "-c", "--chip", action="store", type=str, dest="chip", required=True,
    help=f"Target chip, case insensitive ({', '.join(c.value for c in Chip)})")
parser.add_argument(
    "-f", "--flash-size", action="store", type=flash_size_arg, dest="flash_size", default=None,
    help=f"Flash chip size ({', '.join(f.label for f in FlashSize)}), "
         f"used to size flash-mapped regions (default is {DEFAULT_FLASH_SIZE.label})")
parser.add_argument(
    "--require-flash-size", action="store_true", dest="require_flash_size",
    help="Fail instead of using the default flash size when none is given")
parser.add_argument(
    "-w", "--width", action="store", type=width_arg, dest="width", default=DEFAULT_WIDTH,
    help=f"Width of the section bars in characters (default is {DEFAULT_WIDTH})")
parser.add_argument(
    "-s", "--summary", action="store_true", dest="summary",
    help="Print usage summary of each occupied region")
parser.add_argument(
    "-v", "--verbose", action="store_true", dest="verbose",
    help="Print status information on standard error")
parser.add_argument(
    "--version", action="version", version=f"%(prog)s {__version__}")


def run(args: argparse.Namespace) -> None:
    chip = Chip.parse(args.chip)
    regions = regions_for(chip, args.flash_size, args.require_flash_size)
    flash_size = args.flash_size or DEFAULT_FLASH_SIZE
    print_status(f"chip {chip.value}, flash size {flash_size.label}", args.verbose)
    for region in regions:
        print_status(f"  {region!r}", args.verbose)

    # read and classify everything before printing, so a failure leaves no partial output
    sections = read_sections(args.file)
    classification = classify(sections, regions)
    for section in unclassified(sections, regions):
        print_status(f"section {section.name} at 0x{section.address:08x} "
                     f"is outside of all regions, skipped", args.verbose)

    if not classification:
        print_status("no section found in any region", args.verbose)
        return

    print(render_text(classification, args.width))
    if args.summary:
        print()
        print(render_summary(classification))


def main(argv: Optional[List[str]] = None) -> None:
    args = parser.parse_args(argv)
    colorama.init()
    try:
        run(args)
    except MemvizError as e:
        print_error(str(e))
        sys.exit(e.exit_code)


if __name__ == '__main__':
    main()
