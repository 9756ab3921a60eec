from hexobot.agent.tools.web.markdown import html_to_markdown, normalize_whitespace
from hexobot.utils.entities import decode_entities, strip_html


def test_decode_named_and_numeric_entities() -> None:
    assert decode_entities("A &amp; B &#169; C") == "A & B (c) C"
    assert decode_entities("&lt;p&gt; &quot;q&quot; &#39;s&#39;") == "<p> \"q\" 's'"
    assert decode_entities("a&mdash;b&ndash;c&hellip; &copy; &reg;") == "a---b--c... (c) (R)"
    assert decode_entities("&#65;&#x42;") == "AB"


def test_decode_leaves_unknown_entities_unchanged() -> None:
    assert decode_entities("&foo; &euro; & alone") == "&foo; &euro; & alone"


def test_decode_is_single_pass() -> None:
    assert decode_entities("&amp;lt;") == "&lt;"


def test_strip_html_collapses_whitespace() -> None:
    assert strip_html("<b>Hello</b>\n  <i>world</i> &amp; more") == "Hello world & more"


def test_title_is_extracted_and_decoded() -> None:
    page = html_to_markdown("<html><head><title> Tom &amp; Jerry </title></head><body>x</body></html>")

    assert page.title == "Tom & Jerry"


def test_missing_title_defaults_to_empty() -> None:
    assert html_to_markdown("<p>no title</p>").title == ""


def test_script_and_non_content_blocks_are_removed() -> None:
    html = (
        "<body><script type='text/javascript'>var secret = 'leak';\nalert(1);</script>"
        "<STYLE>.x { color: red }</STYLE>"
        "<nav>menu</nav><header>top</header><footer>bottom</footer>"
        "<!-- hidden comment --><p>Visible</p></body>"
    )
    content = html_to_markdown(html).content

    assert content == "Visible"
    assert "secret" not in content
    assert "alert" not in content


def test_heading_is_surrounded_by_blank_lines() -> None:
    content = html_to_markdown("<p>Before</p><h1>Hi</h1><p>After</p>").content

    assert content == "Before\n\n# Hi\n\nAfter"
    assert html_to_markdown("<h1>Hi</h1>").content == "# Hi"


def test_heading_levels() -> None:
    content = html_to_markdown("<h2>Two</h2><h3>Three</h3><h5>Five</h5>").content

    assert content.split("\n\n") == ["## Two", "### Three", "#### Five"]


def test_links_lists_and_inline_formatting() -> None:
    html = (
        '<ul><li><a href="https://example.com" class="x">Example <b>site</b></a></li>'
        "<li><em>second</em> item</li></ul>"
        "<p>Use <code>pip</code> and <strong>stay</strong> calm<br/>next line</p>"
    )
    content = html_to_markdown(html).content

    assert "- [Example **site**](https://example.com)" in content
    assert "- _second_ item" in content
    assert "Use `pip` and **stay** calm\nnext line" in content


def test_pre_block_becomes_fenced_code() -> None:
    content = html_to_markdown("<pre>print(1)</pre>").content

    assert content == "```\nprint(1)\n```"


def test_entities_decoded_after_tag_stripping() -> None:
    content = html_to_markdown("<p>&lt;div&gt; is a tag &nbsp; &amp; more</p>").content

    assert content == "<div> is a tag & more"


def test_normalize_whitespace() -> None:
    assert normalize_whitespace("  a \t b  \n\n\n\n  c  ") == "a b\n\nc"


def test_malformed_markup_does_not_raise() -> None:
    page = html_to_markdown("<div><p>unclosed <b>bold <a href='x'>link <h1>oops</div></title><")

    assert isinstance(page.content, str)
    assert "unclosed" in page.content


def test_oversized_numeric_references_are_left_unchanged() -> None:
    huge_decimal = "&#" + "1" * 5000 + ";"
    huge_hex = "&#x" + "f" * 5000 + ";"

    assert decode_entities(f"a {huge_decimal} b") == f"a {huge_decimal} b"
    assert decode_entities(huge_hex) == huge_hex
    assert decode_entities("&#1114112;") == "&#1114112;"

    page = html_to_markdown(f"<p>x {huge_decimal} y</p>")
    assert page.content == f"x {huge_decimal} y"
