from datetime import datetime

T0 = datetime(2025, 3, 3, 9, 0, 0)

CANDIDATE_ID = 7
OTHER_CANDIDATE_ID = 8


def mcq_payload(question_count: int = 4, time_limit: int | None = 30) -> dict:
    return {
        "id": 1,
        "title": "Networking basics",
        "type": "mcq",
        "timeLimit": time_limit,
        "questions": [
            {
                "id": f"q{i}",
                "text": f"Question {i}",
                "options": [{"id": "a", "text": "A"}, {"id": "b", "text": "B"}, {"id": "c", "text": "C"}],
                "correctOptionId": "a",
            }
            for i in range(1, question_count + 1)
        ],
    }


def fill_payload() -> dict:
    return {
        "id": 2,
        "title": "Protocols",
        "type": "fill-in-blanks",
        "questions": [
            {
                "id": "f1",
                "text": "The [[b1]] suite includes [[b2]].",
                "blanks": [{"id": "b1", "correctAnswer": "TCP/IP"}, {"id": "b2", "correctAnswer": "UDP"}],
            },
            {
                "id": "f2",
                "text": "HTTP runs on port [[b3]] and HTTPS on [[b4]].",
                "blanks": [{"id": "b3", "correctAnswer": "80"}, {"id": "b4", "correctAnswer": "443"}],
            },
        ],
    }


def video_payload() -> dict:
    return {
        "id": 3,
        "title": "Tell us about yourself",
        "type": "video",
        "questions": [
            {"id": "v1", "text": "Introduce yourself", "timeLimit": 120},
            {"id": "v2", "text": "Describe a hard bug", "timeLimit": 180},
        ],
    }
