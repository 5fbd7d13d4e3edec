"""评分进度：判断评委是否已完成对某作品的全部维度评分"""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from hackjudge.db.crud import (
    count_scored_criteria,
    get_criteria,
    get_entry,
    get_judge,
    get_scored_counts_for_judge,
    get_submitted_entries,
)
from hackjudge.judging.errors import NotFoundError
from hackjudge.models.schemas import EntryProgress, JudgeWorklist


def is_scoring_complete(scored_criteria: int, total_criteria: int) -> bool:
    """已评维度数等于维度总数即为完成"""
    return scored_criteria == total_criteria


async def get_entry_progress(db: AsyncSession, entry_id: int, judge_id: int) -> EntryProgress:
    """
    获取评委对某作品的评分进度
    
    每次都从当前评分记录重新计算，不存储任何状态。
    """
    entry = await get_entry(db, entry_id)
    if entry is None:
        raise NotFoundError(f"作品不存在: {entry_id}")
    
    judge = await get_judge(db, judge_id)
    if judge is None or not judge.is_active or judge.competition_id != entry.competition_id:
        raise NotFoundError(f"评委 {judge_id} 不属于作品 {entry_id} 所在的比赛")
    
    total = len(await get_criteria(db, entry.competition_id))
    scored = await count_scored_criteria(db, entry_id, judge_id, entry.competition_id)
    
    return EntryProgress(
        entry_id=entry.id,
        title=entry.title,
        team_id=entry.team_id,
        team_name=entry.team.name,
        scored_criteria=scored,
        total_criteria=total,
        is_complete=is_scoring_complete(scored, total),
    )


async def is_complete(db: AsyncSession, entry_id: int, judge_id: int) -> bool:
    """评委是否已为作品的所有维度打分"""
    progress = await get_entry_progress(db, entry_id, judge_id)
    return progress.is_complete


async def list_entries_for_judge(db: AsyncSession, judge_id: int) -> JudgeWorklist:
    """
    把评委所在比赛的已提交作品分成“待评”和“已评”两组
    
    Args:
        db: 数据库会话
        judge_id: 评委身份 ID（评委身份只属于一个比赛）
    
    Returns:
        JudgeWorklist
    """
    judge = await get_judge(db, judge_id)
    if judge is None or not judge.is_active:
        raise NotFoundError(f"评委不存在或已停用: {judge_id}")
    
    competition_id = judge.competition_id
    total = len(await get_criteria(db, competition_id))
    entries = await get_submitted_entries(db, competition_id)
    scored_counts = await get_scored_counts_for_judge(db, judge_id, competition_id)
    
    worklist = JudgeWorklist(judge_id=judge_id, competition_id=competition_id)
    
    for entry in entries:
        scored = scored_counts.get(entry.id, 0)
        progress = EntryProgress(
            entry_id=entry.id,
            title=entry.title,
            team_id=entry.team_id,
            team_name=entry.team.name,
            scored_criteria=scored,
            total_criteria=total,
            is_complete=is_scoring_complete(scored, total),
        )
        
        if progress.is_complete:
            worklist.judged.append(progress)
        else:
            worklist.to_judge.append(progress)
    
    logger.info(
        f"评委作品列表: judge_id={judge_id}, 待评={len(worklist.to_judge)}, 已评={len(worklist.judged)}"
    )
    
    return worklist
