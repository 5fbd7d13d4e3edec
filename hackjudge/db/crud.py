"""数据库 CRUD 操作"""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hackjudge.models.database import (
    Criterion,
    Entry,
    Judge,
    JudgeFeedback,
    Score,
    Team,
)


# ============ 评分维度 ============

async def get_criteria(db: AsyncSession, competition_id: int) -> List[Criterion]:
    """获取比赛的评分维度（按权重降序，便于稳定展示）"""
    result = await db.execute(
        select(Criterion)
        .where(Criterion.competition_id == competition_id)
        .order_by(Criterion.weight.desc(), Criterion.id)
    )
    return list(result.scalars().all())


async def add_criteria(
    db: AsyncSession,
    competition_id: int,
    criteria: List[dict],
) -> List[Criterion]:
    """批量添加评分维度"""
    created = []
    
    for data in criteria:
        criterion = Criterion(
            competition_id=competition_id,
            name=data["name"],
            description=data.get("description"),
            weight=data.get("weight", 1),
            max_score=data.get("max_score", 10),
        )
        db.add(criterion)
        created.append(criterion)
    
    await db.commit()
    return created


# ============ 作品 / 评委 ============

async def get_entry(db: AsyncSession, entry_id: int) -> Optional[Entry]:
    """根据 ID 获取作品（包含队伍）"""
    result = await db.execute(
        select(Entry)
        .where(Entry.id == entry_id)
        .options(selectinload(Entry.team))
    )
    return result.scalar_one_or_none()


async def get_submitted_entries(db: AsyncSession, competition_id: int) -> List[Entry]:
    """获取比赛中已提交的作品（包含队伍）"""
    result = await db.execute(
        select(Entry)
        .where(Entry.competition_id == competition_id, Entry.is_submitted.is_(True))
        .options(selectinload(Entry.team))
        .order_by(Entry.created_at, Entry.id)
    )
    return list(result.scalars().all())


async def get_judge(db: AsyncSession, judge_id: int) -> Optional[Judge]:
    """根据 ID 获取评委身份"""
    result = await db.execute(select(Judge).where(Judge.id == judge_id))
    return result.scalar_one_or_none()


async def get_active_judges(db: AsyncSession, competition_id: int) -> List[Judge]:
    """获取比赛中所有在任评委"""
    result = await db.execute(
        select(Judge)
        .where(Judge.competition_id == competition_id, Judge.is_active.is_(True))
        .order_by(Judge.id)
    )
    return list(result.scalars().all())


async def get_judge_for_user(
    db: AsyncSession, user_id: str, competition_id: int
) -> Optional[Judge]:
    """获取用户在某个比赛中的评委身份"""
    result = await db.execute(
        select(Judge).where(
            Judge.user_id == user_id,
            Judge.competition_id == competition_id,
            Judge.is_active.is_(True),
        )
    )
    return result.scalar_one_or_none()


# ============ 评分记录 ============

def _dialect_insert(db: AsyncSession, model):
    """按数据库方言构造支持 ON CONFLICT 的 insert"""
    dialect = db.get_bind().dialect.name
    
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    
    raise NotImplementedError(f"不支持的数据库方言: {dialect}")


async def upsert_scores(
    db: AsyncSession,
    entry_id: int,
    judge_id: int,
    values: Dict[int, float],
) -> None:
    """
    按 (entry_id, judge_id, criterion_id) 写入评分
    
    单条 INSERT ... ON CONFLICT DO UPDATE 语句，已存在则原地更新（后写覆盖），
    不会产生重复记录。调用方负责提交事务。
    """
    if not values:
        return
    
    now = datetime.utcnow()
    stmt = _dialect_insert(db, Score).values(
        [
            {
                "entry_id": entry_id,
                "judge_id": judge_id,
                "criterion_id": criterion_id,
                "value": value,
                "created_at": now,
                "updated_at": now,
            }
            for criterion_id, value in values.items()
        ]
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["entry_id", "judge_id", "criterion_id"],
        set_={"value": stmt.excluded.value, "updated_at": stmt.excluded.updated_at},
    )
    await db.execute(stmt)


async def upsert_feedback(
    db: AsyncSession,
    entry_id: int,
    judge_id: int,
    feedback: Optional[str],
) -> None:
    """写入 (作品, 评委) 的文字反馈，调用方负责提交事务"""
    now = datetime.utcnow()
    stmt = _dialect_insert(db, JudgeFeedback).values(
        entry_id=entry_id,
        judge_id=judge_id,
        feedback=feedback,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["entry_id", "judge_id"],
        set_={"feedback": stmt.excluded.feedback, "updated_at": stmt.excluded.updated_at},
    )
    await db.execute(stmt)


async def get_feedback(db: AsyncSession, entry_id: int, judge_id: int) -> Optional[str]:
    """获取评委对作品的反馈"""
    result = await db.execute(
        select(JudgeFeedback.feedback).where(
            JudgeFeedback.entry_id == entry_id,
            JudgeFeedback.judge_id == judge_id,
        )
    )
    return result.scalar_one_or_none()


async def get_judge_scores(db: AsyncSession, entry_id: int, judge_id: int) -> Dict[int, float]:
    """获取评委对某作品已有的评分 criterion_id → value"""
    result = await db.execute(
        select(Score.criterion_id, Score.value).where(
            Score.entry_id == entry_id,
            Score.judge_id == judge_id,
        )
    )
    return {criterion_id: value for criterion_id, value in result.all()}


async def count_scored_criteria(
    db: AsyncSession, entry_id: int, judge_id: int, competition_id: int
) -> int:
    """统计评委对某作品已评分的不同维度数（只计本比赛的维度）"""
    result = await db.execute(
        select(func.count(func.distinct(Score.criterion_id)))
        .select_from(Score)
        .join(Criterion, Criterion.id == Score.criterion_id)
        .where(
            Score.entry_id == entry_id,
            Score.judge_id == judge_id,
            Criterion.competition_id == competition_id,
        )
    )
    return result.scalar_one()


async def get_scored_counts_for_judge(
    db: AsyncSession, judge_id: int, competition_id: int
) -> Dict[int, int]:
    """按作品统计评委已评分的不同维度数 entry_id → count"""
    result = await db.execute(
        select(Score.entry_id, func.count(func.distinct(Score.criterion_id)))
        .join(Criterion, Criterion.id == Score.criterion_id)
        .where(
            Score.judge_id == judge_id,
            Criterion.competition_id == competition_id,
        )
        .group_by(Score.entry_id)
    )
    return {entry_id: count for entry_id, count in result.all()}


async def get_ranking_snapshot(db: AsyncSession, competition_id: int) -> list:
    """
    一条 SELECT 读取比赛中所有已提交作品及其评分
    
    作品与评分外连接，没有评分的作品也会返回一行（评分字段为 None）。
    同一条语句保证所有作品来自同一个快照。
    """
    result = await db.execute(
        select(
            Entry.id,
            Entry.title,
            Entry.team_id,
            Team.name,
            Score.judge_id,
            Score.criterion_id,
            Score.value,
        )
        .join(Team, Team.id == Entry.team_id)
        .outerjoin(Score, Score.entry_id == Entry.id)
        .where(Entry.competition_id == competition_id, Entry.is_submitted.is_(True))
        .order_by(Entry.created_at, Entry.id, Score.id)
    )
    return list(result.all())
