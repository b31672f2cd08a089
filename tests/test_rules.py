import pytest

from supermarkdown import HeadingStyle, Options, convert, convert_with_options
from supermarkdown.rules import RuleRegistry, default_registry
from supermarkdown.rules.base import Rule
from supermarkdown.rules.code import language_from_classes
from supermarkdown.rules.table import Alignment


def test_registry_tag_sets_are_disjoint() -> None:
    class First(Rule):
        tags = frozenset({"p", "span"})

    class Second(Rule):
        tags = frozenset({"span"})

    with pytest.raises(ValueError, match="span"):
        RuleRegistry([First(), Second()])


def test_default_registry_lookup() -> None:
    registry = default_registry()
    assert registry is default_registry()
    assert type(registry.find("h3")).__name__ == "HeadingRule"
    assert registry.find("section") is None


def test_headings() -> None:
    assert convert("<h3>  Deep \n title </h3>") == "### Deep title"
    assert convert("<h1> </h1>") == ""
    setext = Options(heading_style=HeadingStyle.SETEXT)
    assert convert_with_options("<h2>Sub</h2>", setext) == "Sub\n---"
    assert convert_with_options("<h4>Deep</h4>", setext) == "#### Deep"


def test_paragraphs_are_separated_by_blank_line() -> None:
    assert convert("<p>One</p>\n\n<p>Two</p><p> </p>") == "One\n\nTwo"


def test_emphasis_and_strikethrough() -> None:
    html = "<p><strong>bold</strong> <b>b</b> <em>it</em> <i>i</i> <del>gone</del> <s>s</s></p>"
    assert convert(html) == "**bold** **b** *it* *i* ~~gone~~ ~~s~~"
    assert convert("<p>a<strong> </strong>b</p>") == "ab"


def test_html_passthrough_tags() -> None:
    html = (
        "<p>x<sup>2</sup> H<sub>2</sub>O <kbd>Ctrl</kbd> <mark>hot</mark> "
        "<samp>out</samp> <var>n</var></p>"
    )
    assert convert(html) == (
        "x<sup>2</sup> H<sub>2</sub>O <kbd>Ctrl</kbd> <mark>hot</mark> "
        "<samp>out</samp> <var>n</var>"
    )


def test_abbr_title_is_attribute_escaped() -> None:
    html = '<p><abbr title="Hyper &quot;Text&quot; &lt;ML&gt;">HTML</abbr></p>'
    assert convert(html) == '<abbr title="Hyper &quot;Text&quot; &lt;ML&gt;">HTML</abbr>'


def test_line_break_and_horizontal_rule() -> None:
    assert convert("<p>a<br>b</p>") == "a\nb"
    assert convert("<p>a</p><hr><p>b</p>") == "a\n\n---\n\nb"


def test_blockquote_prefixes_every_line() -> None:
    html = "<blockquote><p>One</p>\n<p>Two</p></blockquote>"
    assert convert(html) == "> One\n>\n> Two"


def test_details_renders_summary_as_bold_quote() -> None:
    html = "<details><summary>More info</summary><p>Hidden</p><p>Text</p></details>"
    assert convert(html) == "> **More info**\n>\n> Hidden\n>\n> Text"
    assert convert("<details><summary>Only</summary></details>") == "> **Only**"
    assert convert("<details></details>") == ""


def test_definition_list() -> None:
    html = "<dl><dt>Term</dt><dd>First</dd><dt>Other</dt><dd>Second</dd></dl>"
    assert convert(html) == "Term\n: First\n\nOther\n: Second"


def test_lists() -> None:
    assert convert("<ul>\n  <li>One</li>\n  <li></li>\n  <li>Two</li>\n</ul>") == "- One\n- Two"
    assert convert('<ol start="3"><li>c</li><li>d</li></ol>') == "3. c\n4. d"
    assert convert_with_options("<ul><li>x</li></ul>", {"bullet_marker": "*"}) == "* x"


def test_nested_list_indentation_does_not_compound() -> None:
    html = "<ul><li>A<ul><li>B<ul><li>C</li></ul></li></ul></li><li>D</li></ul>"
    assert convert(html) == "- A\n\n  - B\n\n    - C\n- D"


def test_nested_ordered_list_uses_parent_prefix_width() -> None:
    assert convert("<ol><li>A<ol><li>B</li></ol></li></ol>") == "1. A\n\n   1. B"


def test_pre_with_language_and_gutter() -> None:
    html = (
        '<pre><span class="line-numbers">1\n2</span>'
        '<code class="language-python">x = 1\ny = 2\n</code></pre>'
    )
    assert convert(html) == "```python\nx = 1\ny = 2\n```"


def test_pre_fence_grows_past_backtick_runs() -> None:
    assert convert("<pre>a ``` b</pre>") == "````\na ``` b\n````"
    assert convert_with_options("<pre>code</pre>", Options(code_fence="~")) == "~~~\ncode\n~~~"
    assert convert("<pre>\n\n</pre>") == ""


def test_language_detection_from_classes() -> None:
    assert language_from_classes(["lang-rust"]) == "rust"
    assert language_from_classes(["highlight-go"]) == "go"
    assert language_from_classes(["hljs-keyword", "hljs-ruby"]) == "ruby"
    assert language_from_classes(["hljs", "Python"]) == "python"
    assert language_from_classes(["hljs-string"]) is None


def test_inline_code_delimiters() -> None:
    assert convert("<p>Use <code>a`b</code> here</p>") == "Use ``a`b`` here"
    assert convert("<p><code>`x</code></p>") == "`` `x ``"
    assert convert("<p>a<code></code>b</p>") == "ab"


def test_links() -> None:
    assert convert('<a href="https://example.com">https://example.com</a>') == "<https://example.com>"
    assert convert('<a href="mailto:me@example.com">me@example.com</a>') == "<me@example.com>"
    assert convert('<p><a href="#">Top</a> <a>Bare</a></p>') == "Top Bare"
    assert (
        convert('<a href="https://en.wikipedia.org/wiki/Foo_(bar)">Foo</a>')
        == "[Foo](https://en.wikipedia.org/wiki/Foo_%28bar%29)"
    )


def test_link_title_and_base_url() -> None:
    options = Options(base_url="https://example.com/guide/")
    html = '<a href="/docs" title="The &quot;docs&quot;">Docs</a>'
    assert convert_with_options(html, options) == '[Docs](https://example.com/docs "The \\"docs\\"")'


def test_images() -> None:
    html = '<img src="a b.png" alt="pic" title="A &quot;pic&quot;">'
    assert convert(html) == '![pic](a%20b.png "A \\"pic\\"")'
    assert convert('<p><img alt="none"></p>') == ""
    options = Options(base_url="https://example.com/img/")
    assert convert_with_options('<img src="cat.png" alt="Cat">', options) == (
        "![Cat](https://example.com/img/cat.png)"
    )


def test_figure_with_caption_and_picture() -> None:
    html = '<figure><img src="cat.png" alt="Cat"><figcaption> A  cat </figcaption></figure>'
    assert convert(html) == "![Cat](cat.png)\n*A cat*"
    picture = '<figure><picture><source srcset="x.webp"><img src="x.png" alt="X"></picture></figure>'
    assert convert(picture) == "![X](x.png)"
    assert convert("<figure><figcaption>No image</figcaption></figure>") == ""


def test_table_with_alignment() -> None:
    html = (
        "<table><tr><th>Name</th><th align='right'>Qty</th></tr>"
        "<tr><td>Apple</td><td>3</td></tr></table>"
    )
    assert convert(html) == "| Name  | Qty |\n| ----- | --: |\n| Apple |   3 |"


def test_table_pads_short_rows_and_escapes_pipes() -> None:
    html = (
        "<table><thead><tr><th>a|b</th><th>c</th></tr></thead>"
        "<tbody><tr><td>d</td></tr><tr></tr></tbody></table>"
    )
    lines = convert(html).split("\n")
    assert lines == ["| a\\|b | c   |", "| ---- | --- |", "| d    |     |"]


def test_table_caption_and_style_alignment() -> None:
    html = (
        "<table><caption>Totals</caption>"
        "<tr><td style='text-align: center'>x</td><td style='TEXT-ALIGN:left'>y</td></tr></table>"
    )
    assert convert(html) == "|  x  | y   |\n| :-: | :-- |\n\n*Totals*"
    assert Alignment("right").separator(4) == "---:"


def test_empty_table_renders_nothing() -> None:
    assert convert("<table><tr></tr></table>") == ""


def test_non_content_elements_are_dropped() -> None:
    html = (
        "<html><head><title>T</title><style>p { color: red }</style></head>"
        "<body><script>alert(1)</script><noscript>Enable JS</noscript><p>Hi</p></body></html>"
    )
    assert convert(html) == "Hi"
