from supermarkdown.escape import (
    calculate_fence,
    code_delimiter_length,
    escape_attribute,
    escape_markdown,
    escape_table_cell,
    escape_title,
    escape_url,
    resolve_url,
)
from supermarkdown.whitespace import collapse_newlines, normalize_block_whitespace, tidy_block


def test_escape_markdown_special_characters() -> None:
    assert escape_markdown("*a* [b]") == "\\*a\\* \\[b\\]"


def test_escape_title_and_url() -> None:
    assert escape_title('say "hi" \\ bye') == 'say \\"hi\\" \\\\ bye'
    assert escape_url("https://x.org/a (b)") == "https://x.org/a%20%28b%29"


def test_escape_table_cell_and_attribute() -> None:
    assert escape_table_cell("a|b") == "a\\|b"
    assert escape_attribute('<"&">') == "&lt;&quot;&amp;&quot;&gt;"


def test_fence_is_longer_than_any_run_and_at_least_three() -> None:
    assert calculate_fence("plain", "`") == "```"
    assert calculate_fence("has ```` inside", "`") == "`````"
    assert calculate_fence("~~~~~~", "~") == "~~~~~~~"
    assert calculate_fence("``` only backticks", "~") == "~~~"


def test_code_delimiter_length() -> None:
    assert code_delimiter_length("x") == 1
    assert code_delimiter_length("a``b`c") == 3


def test_resolve_url() -> None:
    base = "https://example.com/docs/guide/"
    assert resolve_url(base, "intro.html") == "https://example.com/docs/guide/intro.html"
    assert resolve_url(base, "/root") == "https://example.com/root"
    assert resolve_url(base, "../up") == "https://example.com/docs/up"
    assert resolve_url(base, "mailto:me@example.com") == "mailto:me@example.com"
    assert resolve_url(base, "//cdn.example.com/x.js") == "//cdn.example.com/x.js"


def test_block_whitespace_collapsing_is_idempotent() -> None:
    once = normalize_block_whitespace(" a \n\t b\r\n\nc ")
    assert once == " a b c "
    assert normalize_block_whitespace(once) == once


def test_collapse_newlines_and_tidy_block() -> None:
    assert collapse_newlines("a\n\n\n\nb") == "a\n\nb"
    assert tidy_block("  one \n\n \n\ntwo  \n") == "one\n\ntwo"
