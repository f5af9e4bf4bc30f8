S = {
    "title": "Exam Prep Tutor",
    "page_preview": "Preview",
    "page_ask": "Ask a question",
    "page_topics": "Learn a topic",
    "preview_hint": "Paste tutor output (markdown, $inline$ / $$block$$ math, pipe tables) to see how it renders.",
    "plain_mode": "Show prose literally (no markdown)",
    "normalize_math": "Convert \\( \\) and \\[ \\] delimiters",
    "subject": "Subject",
    "topic": "Topic",
    "difficulty": "Difficulty",
    "question": "Your question",
    "image": "Or upload a photo of the question",
    "image_context": "Anything typed above is sent with the photo as extra context.",
    "solve": "Solve",
    "chat": "Ask about this lesson",
    "chat_placeholder": "Ask a follow-up question",
    "chat_unavailable": "Follow-up chat is available once the lesson has been saved.",
    "teach": "Teach me",
    "simplify": "Explain it more simply",
    "no_token": "TUTOR_ACCESS_TOKEN is not set; requests will be sent without a bearer token.",
    "auth_failed": "Your session has expired or is not allowed here. Set a fresh TUTOR_ACCESS_TOKEN.",
    "request_failed": "Request failed",
    "solution": "Solution",
    "steps": "Step-by-step",
    "related": "Related topics",
    "sample": (
        "## Area of a circle\n\n"
        "The area is $A = \\pi r^2$ for a circle of radius $r$.\n\n"
        "$$A = \\pi (7)^2 = 49\\pi \\approx 153.94$$\n\n"
        "| Radius | Area |\n"
        "|---|---|\n"
        "| 1 | $\\pi$ |\n"
        "| 2 | $4\\pi$ |\n\n"
        "**Tip:** always write the unit, e.g. $\\text{cm}^2$."
    ),
}
