from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

Difficulty = Literal["simple", "medium", "advanced"]


class SolutionStep(BaseModel):
    step_number: int
    description: str = ""
    formula: Optional[str] = None
    explanation: str = ""


class QuestionSolution(BaseModel):
    question_id: int
    question_text: str = ""
    subject: str = ""
    topic: str = ""
    solution: str = ""
    steps: list[SolutionStep] = Field(default_factory=list)
    related_topics: list[str] = Field(default_factory=list)
    similar_questions: list[str] = Field(default_factory=list)


class QuestionHistoryItem(BaseModel):
    id: int
    question_text: str = ""
    subject: Optional[str] = None
    topic: Optional[str] = None
    ai_solution: str = ""
    solved_at: str = ""


class SubjectList(BaseModel):
    subjects: list[str] = Field(default_factory=list)
    total: int = 0


class TopicLesson(BaseModel):
    subject: str
    topic: str
    summary: str = ""
    detailed_explanation: str = ""
    examples: list[str] = Field(default_factory=list)
    practice_questions: list[str] = Field(default_factory=list)
    video_link: Optional[str] = None
    youtube_video_id: Optional[str] = None
    lesson_id: Optional[int] = None

    def sections(self) -> list[tuple[str, str]]:
        """(label, content) pairs in reading order, empty parts skipped."""
        out: list[tuple[str, str]] = []
        if self.summary.strip():
            out.append(("Summary", self.summary))
        if self.detailed_explanation.strip():
            out.append(("Explanation", self.detailed_explanation))
        for i, example in enumerate(self.examples, start=1):
            if example.strip():
                out.append((f"Example {i}", example))
        for i, question in enumerate(self.practice_questions, start=1):
            if question.strip():
                out.append((f"Practice question {i}", question))
        return out


class SimplifiedExplanation(BaseModel):
    simplified_explanation: str


class TopicChatReply(BaseModel):
    message: str
