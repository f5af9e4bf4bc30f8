import ui.content_widgets as widgets


class FakeStreamlit:
    def __init__(self):
        self.calls = []

    def markdown(self, body, unsafe_allow_html=False):
        self.calls.append(("markdown", body, unsafe_allow_html))

    def latex(self, body):
        self.calls.append(("latex", body))


def _visible(fake):
    # Drop the injected <style> block.
    return [c for c in fake.calls if not (c[0] == "markdown" and c[2])]


def test_render_content_calls(monkeypatch):
    fake = FakeStreamlit()
    monkeypatch.setattr(widgets, "st", fake)
    widgets.render_content("Area **is** $A$\n\n$$A = \\pi r^2$$\n\n| r | A |\n|---|---|\n| 1 | $\\pi$ |")
    calls = _visible(fake)
    assert calls[0] == ("markdown", "Area **is** $A$", False)
    assert calls[1] == ("latex", "A = \\pi r^2")
    assert calls[2] == ("markdown", "| r | A |\n| --- | --- |\n| 1 | $\\pi$ |", False)


def test_empty_content_draws_nothing(monkeypatch):
    fake = FakeStreamlit()
    monkeypatch.setattr(widgets, "st", fake)
    out = widgets.render_content("")
    assert out.is_empty
    assert fake.calls == []


def test_literal_mode_escapes_markdown(monkeypatch):
    fake = FakeStreamlit()
    monkeypatch.setattr(widgets, "st", fake)
    widgets.render_content("a *b*\nc $x$", markdown=False)
    calls = _visible(fake)
    assert calls == [("markdown", "a \\*b\\*  \nc $x$", False)]


def test_structured_table(monkeypatch):
    fake = FakeStreamlit()
    monkeypatch.setattr(widgets, "st", fake)
    widgets.render_structured_table(["Q", "Answer"], [["1"]])
    assert fake.calls == [("markdown", "| Q | Answer |\n| --- | --- |\n| 1 |  |", False)]


def test_inline_and_block_math_helpers(monkeypatch):
    fake = FakeStreamlit()
    monkeypatch.setattr(widgets, "st", fake)
    widgets.render_inline_math("  x^2 ")
    widgets.render_block_math("\\frac{a}{b}\n")
    assert fake.calls == [("markdown", "$x^2$", False), ("latex", "\\frac{a}{b}")]
