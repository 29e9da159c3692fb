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
HTML -> simplified Markdown flattening.

This is a tag-pattern substitution pipeline, not an HTML parser. Each stage is
one regex pass over the output of the previous stage, in a fixed order:

  1. drop <script> and <style> blocks with their contents
  2. <h6>..<h1>  -> "###### text" .. "# text" followed by a blank line
  3. <p>         -> text followed by a blank line
  4. <a href>    -> [text](href)
  5. <b>/<strong> -> **text**, <i>/<em> -> *text*
  6. <li>        -> "- text" line
  7. any other tag is removed
  8. runs of 3+ newlines collapse to one blank line
  9. surrounding whitespace is trimmed

Nested constructs are not resolved: a heading inside a heading yields two
adjacent heading lines. HTML entities are left as-is.
"""

import re
from typing import Callable, List, Optional, Tuple, Union

_FLAGS = re.DOTALL | re.IGNORECASE

Replacement = Union[str, Callable[[re.Match], str]]

# (pattern, replacement, end marker). A match always ends with the end marker,
# so nothing after the last marker in the document can match.
Stage = Tuple[re.Pattern, Replacement, Optional[re.Pattern]]


def _closing(tag: str) -> re.Pattern:
    return re.compile(rf"</{tag}\s*>", _FLAGS)


def _element(tag: str, replacement: Replacement) -> Stage:
    return re.compile(rf"<{tag}\b[^>]*>(.*?)</{tag}\s*>", _FLAGS), replacement, _closing(tag)


def _heading_replacement(level: int) -> Callable[[re.Match], str]:
    marker = "#" * level
    return lambda m: f"{marker} {m.group(1)}\n\n"


_STAGES: List[Stage] = [
    (re.compile(r"<script\b[^>]*>.*?</script\s*>", _FLAGS), "", _closing("script")),
    (re.compile(r"<style\b[^>]*>.*?</style\s*>", _FLAGS), "", _closing("style")),
    *[_element(f"h{level}", _heading_replacement(level)) for level in range(6, 0, -1)],
    _element("p", lambda m: f"{m.group(1)}\n\n"),
    (
        re.compile(r"""<a\b[^>]*?\bhref\s*=\s*(["'])(.*?)\1[^>]*>(.*?)</a\s*>""", _FLAGS),
        lambda m: f"[{m.group(3)}]({m.group(2)})",
        _closing("a"),
    ),
    _element("b", lambda m: f"**{m.group(1)}**"),
    _element("strong", lambda m: f"**{m.group(1)}**"),
    _element("i", lambda m: f"*{m.group(1)}*"),
    _element("em", lambda m: f"*{m.group(1)}*"),
    _element("li", lambda m: f"- {m.group(1)}\n"),
    (re.compile(r"<[^>]+>"), "", re.compile(">")),
    (re.compile(r"\n{3,}"), "\n\n", None),
]


def _substitute(stage: Stage, content: str) -> str:
    """
    Apply one stage. Opening tags are only tried up to the last end marker, so
    unclosed tags such as <li> or <p> do not each rescan the rest of the page.
    """
    pattern, replacement, end_marker = stage
    if end_marker is None:
        return pattern.sub(replacement, content)
    last = None
    for last in end_marker.finditer(content):
        pass
    if last is None:
        return content
    end = last.end()
    return pattern.sub(replacement, content[:end]) + content[end:]


def html_to_markdown(html: str) -> str:
    content = html or ""
    for stage in _STAGES:
        content = _substitute(stage, content)
    return content.strip()
