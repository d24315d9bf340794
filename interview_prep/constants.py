ASSESSMENT_TYPE_MCQ = "mcq"
ASSESSMENT_TYPE_FILL_IN_BLANKS = "fill-in-blanks"
ASSESSMENT_TYPE_VIDEO = "video"

ASSESSMENT_TYPE_VALUES = (
    ASSESSMENT_TYPE_MCQ,
    ASSESSMENT_TYPE_FILL_IN_BLANKS,
    ASSESSMENT_TYPE_VIDEO,
)

# Types scored automatically at submission time.
AUTO_SCORED_TYPES = frozenset({ASSESSMENT_TYPE_MCQ, ASSESSMENT_TYPE_FILL_IN_BLANKS})

ASSIGNMENT_STATUS_PENDING = "pending"
ASSIGNMENT_STATUS_IN_PROGRESS = "in-progress"
ASSIGNMENT_STATUS_COMPLETED = "completed"
ASSIGNMENT_STATUS_REVIEWED = "reviewed"

ASSIGNMENT_STATUS_VALUES = (
    ASSIGNMENT_STATUS_PENDING,
    ASSIGNMENT_STATUS_IN_PROGRESS,
    ASSIGNMENT_STATUS_COMPLETED,
    ASSIGNMENT_STATUS_REVIEWED,
)

TIME_STATUS_NORMAL = "normal"
TIME_STATUS_WARNING = "warning"
TIME_STATUS_CRITICAL = "critical"

SCORE_MIN = 0
SCORE_MAX = 100
