"""评分维度：默认维度与权重工具"""

from typing import Iterable

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from hackjudge.db.crud import add_criteria, get_criteria


DEFAULT_JUDGING_CRITERIA = [
    {
        "name": "Innovation",
        "description": "Originality of the idea and approach. How innovative is the solution?",
        "weight": 3,
        "max_score": 10,
    },
    {
        "name": "Technical Implementation",
        "description": "Quality of code, technical architecture, and overall implementation.",
        "weight": 2,
        "max_score": 10,
    },
    {
        "name": "User Experience",
        "description": "Usability, design, and overall user experience of the solution.",
        "weight": 2,
        "max_score": 10,
    },
    {
        "name": "Impact",
        "description": "Potential impact and value proposition of the solution.",
        "weight": 3,
        "max_score": 10,
    },
]


def total_weight(criteria: Iterable) -> float:
    """所有维度权重之和"""
    return sum(criterion.weight for criterion in criteria)


async def add_default_criteria(db: AsyncSession, competition_id: int) -> bool:
    """
    为比赛添加默认评分维度
    
    只有比赛还没有任何维度时才会添加。
    
    Returns:
        是否添加了默认维度
    """
    existing = await get_criteria(db, competition_id)
    
    if existing:
        logger.info(f"比赛已有评分维度，跳过默认维度: competition_id={competition_id}")
        return False
    
    await add_criteria(db, competition_id, DEFAULT_JUDGING_CRITERIA)
    logger.info(f"已添加默认评分维度: competition_id={competition_id}, 数量={len(DEFAULT_JUDGING_CRITERIA)}")
    return True
