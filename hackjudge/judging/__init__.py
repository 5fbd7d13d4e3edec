"""评审引擎模块"""

from hackjudge.judging.errors import JudgingError, ScoreValidationError, NotFoundError
from hackjudge.judging.criteria import DEFAULT_JUDGING_CRITERIA, add_default_criteria, total_weight
from hackjudge.judging.submission import submit_scores, get_existing_scores, validate_scores
from hackjudge.judging.completion import is_complete, get_entry_progress, list_entries_for_judge
from hackjudge.judging.ranking import rank_entries, compute_project_scores, filter_by_min_judges

__all__ = [
    "JudgingError",
    "ScoreValidationError",
    "NotFoundError",
    "DEFAULT_JUDGING_CRITERIA",
    "add_default_criteria",
    "total_weight",
    "submit_scores",
    "get_existing_scores",
    "validate_scores",
    "is_complete",
    "get_entry_progress",
    "list_entries_for_judge",
    "rank_entries",
    "compute_project_scores",
    "filter_by_min_judges",
]
