# -*- coding: utf-8 -*-
from __future__ import annotations

import streamlit as st

from tutor.api import ApiAuthError, ApiError, TutorApi
from tutor.config import Settings, load_settings
from ui.content_widgets import render_content
from ui.strings import S


def _report_api_error(e: ApiError) -> None:
    if isinstance(e, ApiAuthError):
        st.error(S["auth_failed"])
    else:
        st.error(f"{S['request_failed']}: {e}")


def _page_preview(settings: Settings) -> None:
    st.caption(S["preview_hint"])
    if "preview_text" not in st.session_state:
        st.session_state["preview_text"] = S["sample"]
    content = st.text_area("content", key="preview_text", height=260, label_visibility="collapsed")
    c1, c2 = st.columns(2)
    with c1:
        plain = st.checkbox(S["plain_mode"], value=False)
    with c2:
        normalize = st.checkbox(S["normalize_math"], value=settings.normalize_math)
    st.markdown("---")
    out = render_content(content, markdown=not plain, normalize_math=normalize)
    with st.expander("Segments"):
        st.json([s.model_dump() for s in out.segments])


def _page_ask(settings: Settings, api: TutorApi) -> None:
    subject = st.text_input(S["subject"], key="ask_subject")
    question = st.text_area(S["question"], key="ask_question", height=140)
    image = st.file_uploader(S["image"], type=["png", "jpg", "jpeg", "webp"], key="ask_image")
    if image is not None:
        st.caption(S["image_context"])
    if st.button(S["solve"], disabled=not (question.strip() or image is not None)):
        try:
            if image is not None:
                # Typed text travels with the photo as extra context.
                st.session_state["ask_solution"] = api.solve_question_image_bytes(
                    image.name,
                    bytes(image.getbuffer()),
                    subject.strip() or None,
                    question.strip() or None,
                )
            else:
                st.session_state["ask_solution"] = api.solve_question(question.strip(), subject.strip() or None)
        except ApiError as e:
            _report_api_error(e)

    solution = st.session_state.get("ask_solution")
    if solution is None:
        return
    render_content(solution.question_text, normalize_math=settings.normalize_math)
    st.subheader(S["solution"])
    render_content(solution.solution, normalize_math=settings.normalize_math)
    if solution.steps:
        st.subheader(S["steps"])
        for step in solution.steps:
            render_content(f"**{step.step_number}.** {step.description}", normalize_math=settings.normalize_math)
            if step.formula:
                render_content(step.formula, normalize_math=settings.normalize_math)
            render_content(step.explanation, normalize_math=settings.normalize_math)
    if solution.related_topics:
        st.caption(f"{S['related']}: " + ", ".join(solution.related_topics))


def _page_topics(settings: Settings, api: TutorApi) -> None:
    c1, c2, c3 = st.columns([2, 3, 1])
    with c1:
        subject = st.text_input(S["subject"], key="topic_subject")
    with c2:
        topic = st.text_input(S["topic"], key="topic_name")
    with c3:
        difficulty = st.selectbox(S["difficulty"], ["simple", "medium", "advanced"], index=1)
    if st.button(S["teach"], disabled=not (subject.strip() and topic.strip())):
        try:
            st.session_state["topic_lesson"] = api.teach_topic(subject.strip(), topic.strip(), difficulty)
            st.session_state.pop("topic_simplified", None)
        except ApiError as e:
            _report_api_error(e)

    lesson = st.session_state.get("topic_lesson")
    if lesson is None:
        return
    for label, content in lesson.sections():
        st.subheader(label)
        render_content(content, normalize_math=settings.normalize_math)

    if st.button(S["simplify"]):
        try:
            st.session_state["topic_simplified"] = api.simplify(lesson.topic, lesson.detailed_explanation)
        except ApiError as e:
            _report_api_error(e)
    simplified = st.session_state.get("topic_simplified")
    if simplified is not None:
        render_content(simplified.simplified_explanation, normalize_math=settings.normalize_math)

    _topic_chat(settings, api, lesson)


def _topic_chat(settings: Settings, api: TutorApi, lesson) -> None:
    st.subheader(S["chat"])
    if lesson.lesson_id is None:
        st.caption(S["chat_unavailable"])
        return

    # History is per lesson; a new lesson starts a new conversation.
    chat: dict = st.session_state.setdefault("topic_chat", {})
    history: list[tuple[str, str]] = chat.setdefault(lesson.lesson_id, [])
    for role, text in history:
        with st.chat_message(role):
            render_content(text, normalize_math=settings.normalize_math)

    prompt = st.chat_input(S["chat_placeholder"])
    if not prompt or not prompt.strip():
        return
    with st.chat_message("user"):
        render_content(prompt, normalize_math=settings.normalize_math)
    try:
        reply = api.topic_chat(lesson.lesson_id, prompt.strip())
    except ApiError as e:
        _report_api_error(e)
        return
    history.append(("user", prompt))
    history.append(("assistant", reply.message))
    with st.chat_message("assistant"):
        render_content(reply.message, normalize_math=settings.normalize_math)


def main() -> None:
    st.set_page_config(page_title=S["title"], layout="wide")
    st.title(S["title"])

    settings = load_settings()
    api = TutorApi(settings)

    with st.sidebar:
        page = st.radio("page", [S["page_preview"], S["page_ask"], S["page_topics"]], label_visibility="collapsed")
        if not settings.access_token:
            st.caption(S["no_token"])

    if page == S["page_ask"]:
        _page_ask(settings, api)
    elif page == S["page_topics"]:
        _page_topics(settings, api)
    else:
        _page_preview(settings)


if __name__ == "__main__":
    main()
