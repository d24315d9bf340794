from __future__ import annotations

import re
from dataclasses import dataclass

from interview_prep.schemas.assessment import Blank, FillInBlanksQuestion

# [[label]] marks a blank; the Nth marker left to right is blanks[N].
BLANK_MARKER_RE = re.compile(r"\[\[([^\[\]]*)\]\]")


@dataclass(frozen=True)
class TextSegment:
    text: str


@dataclass(frozen=True)
class BlankSegment:
    index: int
    label: str


def blank_markers(text: str) -> list[str]:
    return [match.group(1).strip() for match in BLANK_MARKER_RE.finditer(text or "")]


def split_blank_text(text: str) -> list[TextSegment | BlankSegment]:
    segments: list[TextSegment | BlankSegment] = []
    cursor = 0
    for index, match in enumerate(BLANK_MARKER_RE.finditer(text or "")):
        if match.start() > cursor:
            segments.append(TextSegment(text[cursor:match.start()]))
        segments.append(BlankSegment(index=index, label=match.group(1).strip()))
        cursor = match.end()
    if text and cursor < len(text):
        segments.append(TextSegment(text[cursor:]))
    return segments


def blank_for_marker(question: FillInBlanksQuestion, marker_index: int) -> Blank | None:
    if 0 <= marker_index < len(question.blanks):
        return question.blanks[marker_index]
    return None


def marker_alignment_problem(question: FillInBlanksQuestion) -> str | None:
    markers = blank_markers(question.text)
    if len(markers) != len(question.blanks):
        return (
            f"question {question.id!r} has {len(markers)} blank marker(s) "
            f"but {len(question.blanks)} blank definition(s)"
        )
    return None
