# Copyright Thales 2025
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Slicing of converted Markdown content.

Stages run in a fixed order, each on the output of the previous one:
headings-only (exclusive, ignores every other option), then section, then
paragraph range, then character window. An empty result is a valid outcome,
never an error.
"""

import re
from typing import List

from searxng_mcp.features.url_reader.structures import SelectionRequest

_PARAGRAPH_RANGE = re.compile(r"^(\d+)(?:-(\d*))?$")


def _heading_level(line: str) -> int:
    return len(line) - len(line.lstrip("#"))


def extract_headings(content: str) -> str:
    return "\n".join(line for line in content.split("\n") if line.startswith("#"))


def extract_section(content: str, heading: str) -> str:
    """
    Return the first heading whose text contains `heading` (case-insensitive)
    together with everything up to the next heading of the same or a higher
    level. Empty string when no heading matches.
    """
    lines = content.split("\n")
    needle = heading.casefold()

    start = None
    level = 0
    for i, line in enumerate(lines):
        if line.startswith("#") and needle in line.lstrip("#").casefold():
            start = i
            level = _heading_level(line)
            break

    if start is None:
        return ""

    end = len(lines)
    for i in range(start + 1, len(lines)):
        if lines[i].startswith("#") and _heading_level(lines[i]) <= level:
            end = i
            break

    # blank separator lines before the next heading belong to no section
    while end > start + 1 and not lines[end - 1].strip():
        end -= 1

    return "\n".join(lines[start:end])


def split_paragraphs(content: str) -> List[str]:
    return [p for p in content.split("\n\n") if p.strip()]


def extract_paragraph_range(content: str, range_spec: str) -> str:
    """
    1-based inclusive paragraph selection: "3" is paragraph 3 only, "2-5" is
    paragraphs 2 to 5 (end clamped), "10-" is paragraph 10 to the end.
    Out of range or malformed specs select nothing.
    """
    match = _PARAGRAPH_RANGE.match(range_spec.strip())
    if match is None:
        return ""

    paragraphs = split_paragraphs(content)
    first = int(match.group(1))
    if first < 1 or first > len(paragraphs):
        return ""

    start = first - 1
    if match.group(2) is None:
        end = first
    elif match.group(2) == "":
        end = len(paragraphs)
    else:
        end = min(int(match.group(2)), len(paragraphs))

    return "\n\n".join(paragraphs[start:end])


def apply_character_window(content: str, start_char: int, max_length: int) -> str:
    start = max(start_char, 0)
    if start >= len(content):
        return ""
    if max_length > 0:
        return content[start : start + max_length]
    return content[start:]


def select_content(content: str, request: SelectionRequest) -> str:
    if request.read_headings:
        return extract_headings(content)

    if request.section:
        content = extract_section(content, request.section)

    if request.paragraph_range:
        content = extract_paragraph_range(content, request.paragraph_range)

    if request.start_char > 0 or request.max_length > 0:
        content = apply_character_window(content, request.start_char, request.max_length)

    return content
