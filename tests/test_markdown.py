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

import time

import pytest

from searxng_mcp.features.url_reader.markdown import html_to_markdown


def test_heading_paragraph_and_bold():
    assert html_to_markdown("<h2>Title</h2><p>Body <b>bold</b></p>") == "## Title\n\nBody **bold**"


def test_script_and_style_are_dropped_with_content():
    html = '<script type="text/javascript">var x = "<p>no</p>";</script><style>\np { color: red }\n</style><p>kept</p>'
    assert html_to_markdown(html) == "kept"


@pytest.mark.parametrize("level", range(1, 7))
def test_every_heading_level(level):
    assert html_to_markdown(f'<h{level} class="t">Head</h{level}>') == "#" * level + " Head"


def test_nested_heading_is_flattened_in_a_single_pass():
    out = html_to_markdown("<h1>Outer <h2>Inner</h2></h1>")
    assert out == "# Outer ## Inner"


def test_links_with_double_and_single_quotes():
    html = '<p><a class="x" href="https://a.test/">A</a> and <a href=\'/b\'>B</a></p>'
    assert html_to_markdown(html) == "[A](https://a.test/) and [B](/b)"


def test_emphasis_variants():
    html = "<p><strong>S</strong> <b>B</b> <em>E</em> <i>I</i></p>"
    assert html_to_markdown(html) == "**S** **B** *E* *I*"


def test_bold_pattern_does_not_swallow_br_or_body():
    html = "<body><p>one<br>two</p></body>"
    assert html_to_markdown(html) == "onetwo"


def test_list_items_become_dash_bullets():
    html = "<ul><li>one</li><li>two</li></ul>"
    assert html_to_markdown(html) == "- one\n- two"


def test_remaining_tags_are_stripped():
    assert html_to_markdown('<div><span data-x="1">text</span><img src="a.png"/></div>') == "text"


def test_newline_runs_are_collapsed():
    assert html_to_markdown("<p>a</p>\n\n\n\n<p>b</p>") == "a\n\nb"


def test_multiline_elements():
    assert html_to_markdown("<h3>\nMulti\n</h3>") == "### \nMulti"


def test_entities_are_not_decoded():
    assert html_to_markdown("<p>a &amp; b</p>") == "a &amp; b"


def test_uppercase_tags_are_recognised():
    assert html_to_markdown("<H1>Title</H1><P>Body</P>") == "# Title\n\nBody"


@pytest.mark.parametrize(
    "html",
    ["", "   ", "<", "<<>>", "<p>unclosed", "</h1>stray", "<a href='x'>no close", "\x00�"],
)
def test_malformed_input_never_raises(html):
    assert isinstance(html_to_markdown(html), str)


def test_unclosed_items_before_a_closed_one():
    assert html_to_markdown("<li>a<li>b</li><li>c") == "- ab\nc"


def test_unclosed_list_items_and_paragraphs_convert_in_linear_time():
    n = 20000
    html = "<ul>" + "<li>item text here" * n + "</ul>" + "<p>para" * n
    started = time.monotonic()

    out = html_to_markdown(html)

    assert time.monotonic() - started < 5
    assert out.startswith("item text hereitem text here")
    assert out.endswith("parapara")
    assert "<" not in out
