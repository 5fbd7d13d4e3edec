"""数据模型模块"""

from hackjudge.models.database import (
    Base,
    Competition,
    Team,
    Entry,
    Judge,
    Criterion,
    Score,
    JudgeFeedback,
)
from hackjudge.models.schemas import (
    ScoreSubmission,
    CriterionResponse,
    CriterionScore,
    ProjectScore,
    RankingResponse,
    JudgeResponse,
    EntryProgress,
    JudgeWorklist,
    SubmissionResult,
    ExistingScoresResponse,
)

__all__ = [
    # ORM 模型
    "Base",
    "Competition",
    "Team",
    "Entry",
    "Judge",
    "Criterion",
    "Score",
    "JudgeFeedback",
    # API 模型
    "ScoreSubmission",
    "CriterionResponse",
    "CriterionScore",
    "ProjectScore",
    "RankingResponse",
    "JudgeResponse",
    "EntryProgress",
    "JudgeWorklist",
    "SubmissionResult",
    "ExistingScoresResponse",
]
