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

import sys
from pathlib import Path
from typing import Union

import colorama

PathLike = Union[str, Path]


def readable_size(size: int) -> str:
    """Print size in human readable format, with units."""
    if size < 1024:
        return f"{size} B"
    size /= 1024
    for unit in ["k", "M", "G", "T"]:
        if abs(size) < 1024:
            return f"{size:.2f} {unit}B"
        size /= 1024
    raise ValueError()


def print_status(message: str, verbose: bool = True) -> None:
    """Print a dimmed status message on stderr, only if `verbose` is set."""
    if verbose:
        print(colorama.Fore.LIGHTBLACK_EX + message + colorama.Style.RESET_ALL, file=sys.stderr)


def print_error(message: str) -> None:
    print(colorama.Fore.RED + f"ERROR: {message}" + colorama.Style.RESET_ALL, file=sys.stderr)
