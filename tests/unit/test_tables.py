from tutor.content import parse_markdown_table, split_cell_math, structured_table, table_to_markdown
from tutor.content.models import InlineMathSegment, TextSegment


def test_parse_basic_table():
    table = parse_markdown_table("| A | B |\n|---|---|\n| 1 | 2 |")
    assert table is not None
    assert table.headers == ["A", "B"]
    assert table.rows == [["1", "2"]]
    assert table.width == 2


def test_short_rows_are_padded_and_long_rows_cut():
    table = parse_markdown_table("| A | B | C |\n|---|---|---|\n| 1 |\n| 1 | 2 | 3 | 4 |")
    assert table.rows == [["1", "", ""], ["1", "2", "3"]]


def test_empty_middle_cell_is_kept():
    table = parse_markdown_table("| A | B | C |\n|---|---|---|\n| 1 |  | 3 |")
    assert table.rows == [["1", "", "3"]]


def test_escaped_pipe_stays_in_cell():
    table = parse_markdown_table("| A | B |\n|---|---|\n| x \\| y | z |")
    assert table.rows == [["x | y", "z"]]


def test_not_a_table():
    assert parse_markdown_table("| a | b |") is None
    assert parse_markdown_table("| a | b |\n| c | d |") is None
    assert parse_markdown_table("") is None
    assert parse_markdown_table("|   |\n|---|\n| 1 |") is None


def test_structured_table_pads_rows():
    table = structured_table(["Question", "Answer", "Topic"], [["1", "B"], ["2", "C", "Algebra"]])
    assert table.rows == [["1", "B", ""], ["2", "C", "Algebra"]]


def test_split_cell_math():
    parts = split_cell_math(r"area $\pi r^2$ cm")
    assert [type(p) for p in parts] == [TextSegment, InlineMathSegment, TextSegment]
    assert parts[1].math == r"\pi r^2"
    assert split_cell_math("") == []


def test_table_to_markdown_escapes_pipes():
    table = structured_table(["a|b", "c"], [["1", "2"]])
    md = table_to_markdown(table)
    assert md.splitlines() == [
        "| a\\|b | c |",
        "| --- | --- |",
        "| 1 | 2 |",
    ]
    assert parse_markdown_table(md).headers == ["a|b", "c"]
