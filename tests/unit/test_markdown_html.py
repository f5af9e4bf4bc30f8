from tutor.content.markdown_html import markdown_to_html


def test_headings_and_paragraph():
    html = markdown_to_html("# Title\n\nSome *italic* and `code`.")
    assert html == "<h1>Title</h1>\n<p>Some <em>italic</em> and <code>code</code>.</p>"


def test_heading_levels():
    html = markdown_to_html("## Two\n### Three\n#### Four")
    assert html.splitlines() == ["<h2>Two</h2>", "<h3>Three</h3>", "<h4>Four</h4>"]


def test_lists():
    html = markdown_to_html("- a\n- b\n\n1. one\n2. two")
    assert html == "<ul><li>a</li><li>b</li></ul>\n<ol><li>one</li><li>two</li></ol>"


def test_bold_variants():
    assert markdown_to_html("**x** and __y__") == "<p><strong>x</strong> and <strong>y</strong></p>"


def test_fenced_code_is_escaped_and_untouched():
    html = markdown_to_html("```python\nx = 1 < 2  # **not bold**\n```")
    assert html == '<pre><code class="language-python">x = 1 &lt; 2  # **not bold**</code></pre>'


def test_unterminated_fence_runs_to_end():
    html = markdown_to_html("```\ncode line\n## not a heading")
    assert html == "<pre><code>code line\n## not a heading</code></pre>"


def test_escaping_and_identifiers():
    assert markdown_to_html("<script>") == "<p>&lt;script&gt;</p>"
    assert markdown_to_html("use snake_case_name here") == "<p>use snake_case_name here</p>"


def test_link_and_rule():
    html = markdown_to_html("[WAEC](https://waecdirect.org)\n\n---")
    assert html == '<p><a href="https://waecdirect.org">WAEC</a></p>\n<hr>'


def test_empty():
    assert markdown_to_html("") == ""


def test_private_use_text_that_looks_like_a_code_token():
    text = "note " + chr(0xE002) + "0" + chr(0xE003) + " end"
    html = markdown_to_html(text + " and `x`")
    assert html == f"<p>{text} and <code>x</code></p>"


def test_unsafe_link_schemes_stay_text():
    assert markdown_to_html("[click](javascript:alert(1))") == "<p>[click](javascript:alert(1))</p>"
    assert "<a" not in markdown_to_html("[x](data:text/html;base64,AAAA)")
    assert "<a" not in markdown_to_html("[x](JavaScript:void)")


def test_safe_link_schemes():
    assert markdown_to_html("[m](mailto:help@tutor.ng)") == '<p><a href="mailto:help@tutor.ng">m</a></p>'
    assert markdown_to_html("[next](lessons/2#top)") == '<p><a href="lessons/2#top">next</a></p>'


def test_link_href_is_not_touched_by_emphasis():
    html = markdown_to_html("[**docs**](https://x.org/_a_/b)")
    assert html == '<p><a href="https://x.org/_a_/b"><strong>docs</strong></a></p>'
