"""评分提交：把评委的一次（可能不完整的）评分写入评分表"""

import math
from typing import Dict, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from hackjudge.db.crud import (
    count_scored_criteria,
    get_criteria,
    get_entry,
    get_feedback,
    get_judge,
    get_judge_scores,
    upsert_feedback,
    upsert_scores,
)
from hackjudge.judging.completion import is_scoring_complete
from hackjudge.judging.errors import NotFoundError, ScoreValidationError
from hackjudge.models.database import Criterion
from hackjudge.models.schemas import ExistingScoresResponse, SubmissionResult


def validate_scores(
    criteria: List[Criterion],
    scores: Dict[int, Optional[float]],
) -> Dict[int, float]:
    """
    按比赛的评分维度校验一次提交
    
    - 空值视为本次未评分，直接忽略
    - 一个有效评分都没有 → ScoreValidationError
    - 不属于本比赛的维度 → NotFoundError
    - 分数不在 [0, max_score] 内 → ScoreValidationError（不做截断）
    
    Returns:
        criterion_id → value，只包含有效评分
    """
    provided = {
        criterion_id: value
        for criterion_id, value in scores.items()
        if value is not None
    }
    
    if not provided:
        raise ScoreValidationError("请至少为一个维度打分后再提交")
    
    criteria_by_id = {criterion.id: criterion for criterion in criteria}
    
    unknown = sorted(cid for cid in provided if cid not in criteria_by_id)
    if unknown:
        raise NotFoundError(f"评分维度不存在或不属于该比赛: {unknown}")
    
    validated = {}
    for criterion_id, value in provided.items():
        criterion = criteria_by_id[criterion_id]
        
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ScoreValidationError(f"维度 {criterion.name} 的分数必须是数字: {value!r}")
        if not math.isfinite(value):
            raise ScoreValidationError(f"维度 {criterion.name} 的分数不是有限数: {value}")
        if value < 0 or value > criterion.max_score:
            raise ScoreValidationError(
                f"维度 {criterion.name} 的分数 {value} 超出范围 [0, {criterion.max_score}]"
            )
        
        validated[criterion_id] = float(value)
    
    return validated


async def _resolve_entry_and_judge(db: AsyncSession, entry_id: int, judge_id: int):
    """查找作品与评委，并确认两者属于同一个比赛"""
    entry = await get_entry(db, entry_id)
    if entry is None or not entry.is_submitted:
        raise NotFoundError(f"作品不存在或尚未提交: {entry_id}")
    
    judge = await get_judge(db, judge_id)
    if judge is None or not judge.is_active:
        raise NotFoundError(f"评委不存在或已停用: {judge_id}")
    if judge.competition_id != entry.competition_id:
        raise NotFoundError(f"评委 {judge_id} 不属于作品 {entry_id} 所在的比赛")
    
    return entry, judge


async def submit_scores(
    db: AsyncSession,
    entry_id: int,
    judge_id: int,
    scores: Dict[int, Optional[float]],
    feedback: Optional[str] = None,
) -> SubmissionResult:
    """
    提交评委对作品的评分
    
    1. 校验作品、评委、维度与分数（任何错误都在写入之前抛出）
    2. 按 (作品, 评委, 维度) upsert 评分，未提交的维度保持不变
    3. 提供了反馈则覆盖 (作品, 评委) 的反馈；空字符串表示清空
    4. 提交事务并返回最新进度
    
    重复提交相同内容结果不变（原地更新，不会追加）。
    调用方负责确认评委有权评审该作品。
    """
    try:
        entry, _ = await _resolve_entry_and_judge(db, entry_id, judge_id)
        criteria = await get_criteria(db, entry.competition_id)
        validated = validate_scores(criteria, scores)
        competition_id = entry.competition_id
    except (NotFoundError, ScoreValidationError) as e:
        logger.warning(f"评分提交被拒绝: entry_id={entry_id}, judge_id={judge_id} - {e}")
        raise
    
    existing = await get_judge_scores(db, entry_id, judge_id)
    created = sorted(cid for cid in validated if cid not in existing)
    updated = sorted(cid for cid in validated if cid in existing)
    
    try:
        await upsert_scores(db, entry_id, judge_id, validated)
        if feedback is not None:
            await upsert_feedback(db, entry_id, judge_id, feedback.strip() or None)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"保存评分失败: entry_id={entry_id}, judge_id={judge_id} - {e}")
        raise
    
    total = len(criteria)
    scored = await count_scored_criteria(db, entry_id, judge_id, competition_id)
    
    logger.info(
        f"评分已保存: entry_id={entry_id}, judge_id={judge_id}, "
        f"新增={len(created)}, 更新={len(updated)}, 进度={scored}/{total}"
    )
    
    return SubmissionResult(
        entry_id=entry_id,
        judge_id=judge_id,
        created=created,
        updated=updated,
        scored_criteria=scored,
        total_criteria=total,
        is_complete=is_scoring_complete(scored, total),
    )


async def get_existing_scores(
    db: AsyncSession, entry_id: int, judge_id: int
) -> ExistingScoresResponse:
    """获取评委对作品已有的评分和反馈，用于继续未完成的评分"""
    await _resolve_entry_and_judge(db, entry_id, judge_id)
    
    return ExistingScoresResponse(
        entry_id=entry_id,
        judge_id=judge_id,
        scores=await get_judge_scores(db, entry_id, judge_id),
        feedback=await get_feedback(db, entry_id, judge_id),
    )
