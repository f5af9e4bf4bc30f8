from contextlib import contextmanager

import app
from tutor.api import ApiError
from tutor.config import Settings
from tutor.schemas import QuestionSolution, TopicChatReply, TopicLesson

SOLUTION = QuestionSolution(question_id=1, question_text="Photo question", solution="$$x = 2$$")


class FakeUpload:
    name = "q.png"

    def getbuffer(self):
        return memoryview(b"png-bytes")


class FakeStreamlit:
    def __init__(self, *, text="", area="", upload=None, clicked=False, chat=None):
        self.session_state = {}
        self.errors = []
        self.chat_roles = []
        self._text, self._area, self._upload = text, area, upload
        self._clicked, self._chat = clicked, chat

    def text_input(self, label, key=None):
        return self._text

    def text_area(self, label, key=None, height=None):
        return self._area

    def file_uploader(self, label, type=None, key=None):
        return self._upload

    def button(self, label, disabled=False):
        return self._clicked and not disabled

    def chat_input(self, placeholder):
        return self._chat

    @contextmanager
    def chat_message(self, role):
        self.chat_roles.append(role)
        yield

    def error(self, msg):
        self.errors.append(msg)

    def caption(self, msg):
        pass

    def subheader(self, msg):
        pass


class FakeApi:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def solve_question(self, text, subject):
        self.calls.append(("solve_question", text, subject))
        return SOLUTION

    def solve_question_image_bytes(self, filename, raw, subject, additional_context):
        self.calls.append(("solve_question_image_bytes", filename, raw, subject, additional_context))
        return SOLUTION

    def topic_chat(self, lesson_id, message):
        self.calls.append(("topic_chat", lesson_id, message))
        if self.fail:
            raise ApiError("POST /api/topics/chat: server error 502", status_code=502)
        return TopicChatReply(message="Because $v = u + at$.")


def _settings():
    return Settings(api_url="http://api.test", access_token="", timeout_s=5.0, max_retries=0, normalize_math=True)


def _patch(monkeypatch, fake):
    rendered = []
    monkeypatch.setattr(app, "st", fake)
    monkeypatch.setattr(app, "render_content", lambda content, **kw: rendered.append(content))
    return rendered


def test_ask_with_image_sends_typed_text_as_context(monkeypatch):
    fake = FakeStreamlit(text="Physics", area="  only part (b)  ", upload=FakeUpload(), clicked=True)
    rendered = _patch(monkeypatch, fake)
    api = FakeApi()
    app._page_ask(_settings(), api)
    assert api.calls == [("solve_question_image_bytes", "q.png", b"png-bytes", "Physics", "only part (b)")]
    assert fake.session_state["ask_solution"] is SOLUTION
    assert rendered[:2] == ["Photo question", "$$x = 2$$"]


def test_ask_without_image_uses_text_endpoint(monkeypatch):
    fake = FakeStreamlit(area="Solve 2x = 4", clicked=True)
    _patch(monkeypatch, fake)
    api = FakeApi()
    app._page_ask(_settings(), api)
    assert api.calls == [("solve_question", "Solve 2x = 4", None)]


def test_topic_chat_renders_reply_and_keeps_history(monkeypatch):
    fake = FakeStreamlit(chat="Why?")
    rendered = _patch(monkeypatch, fake)
    api = FakeApi()
    lesson = TopicLesson(subject="Physics", topic="Motion", lesson_id=4)
    app._topic_chat(_settings(), api, lesson)
    assert api.calls == [("topic_chat", 4, "Why?")]
    assert rendered == ["Why?", "Because $v = u + at$."]
    assert fake.chat_roles == ["user", "assistant"]
    assert fake.session_state["topic_chat"][4] == [("user", "Why?"), ("assistant", "Because $v = u + at$.")]


def test_topic_chat_error_is_reported(monkeypatch):
    fake = FakeStreamlit(chat="Why?")
    _patch(monkeypatch, fake)
    lesson = TopicLesson(subject="Physics", topic="Motion", lesson_id=4)
    app._topic_chat(_settings(), FakeApi(fail=True), lesson)
    assert len(fake.errors) == 1
    assert fake.session_state["topic_chat"][4] == []


def test_topic_chat_needs_a_saved_lesson(monkeypatch):
    fake = FakeStreamlit(chat="Why?")
    _patch(monkeypatch, fake)
    api = FakeApi()
    app._topic_chat(_settings(), api, TopicLesson(subject="Physics", topic="Motion"))
    assert api.calls == []
