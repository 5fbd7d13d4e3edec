"""数据库操作模块"""

from hackjudge.db.crud import (
    get_criteria,
    add_criteria,
    get_entry,
    get_submitted_entries,
    get_judge,
    get_active_judges,
    get_judge_for_user,
    upsert_scores,
    upsert_feedback,
    get_feedback,
    get_judge_scores,
    count_scored_criteria,
    get_scored_counts_for_judge,
    get_ranking_snapshot,
)

__all__ = [
    "get_criteria",
    "add_criteria",
    "get_entry",
    "get_submitted_entries",
    "get_judge",
    "get_active_judges",
    "get_judge_for_user",
    "upsert_scores",
    "upsert_feedback",
    "get_feedback",
    "get_judge_scores",
    "count_scored_criteria",
    "get_scored_counts_for_judge",
    "get_ranking_snapshot",
]
