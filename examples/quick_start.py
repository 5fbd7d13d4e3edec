"""快速开始示例"""

import asyncio
import sys
from pathlib import Path

# 添加项目根目录到 Python 路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from hackjudge.db.database import AsyncSessionLocal, init_database
from hackjudge.db.crud import get_criteria
from hackjudge.judging import (
    add_default_criteria,
    filter_by_min_judges,
    list_entries_for_judge,
    rank_entries,
    submit_scores,
)
from hackjudge.models.database import Competition, Entry, Judge, Team
from loguru import logger


async def seed(db) -> dict:
    """创建一个演示比赛：三个作品、两个评委、默认评分维度"""
    competition = Competition(name="Demo Hackathon")
    db.add(competition)
    await db.flush()
    
    teams = [Team(competition_id=competition.id, name=name) for name in ("Alpha", "Beta", "Gamma")]
    db.add_all(teams)
    await db.flush()
    
    entries = [
        Entry(competition_id=competition.id, team_id=team.id, title=f"{team.name} Project", is_submitted=True)
        for team in teams
    ]
    judges = [Judge(user_id=f"demo-judge-{i}", competition_id=competition.id) for i in (1, 2)]
    db.add_all(entries + judges)
    await db.commit()
    
    await add_default_criteria(db, competition.id)
    
    return {
        "competition_id": competition.id,
        "entry_ids": [entry.id for entry in entries],
        "judge_ids": [judge.id for judge in judges],
    }


async def main():
    """快速开始示例"""
    
    logger.info("🏁 黑客松评审计分 - 快速开始示例")
    logger.info("=" * 60)
    
    await init_database()
    
    async with AsyncSessionLocal() as db:
        demo = await seed(db)
        criteria = await get_criteria(db, demo["competition_id"])
        first, second, third = demo["entry_ids"]
        j1, j2 = demo["judge_ids"]
        
        # ============ 评委打分 ============
        logger.info("\n📝 评委提交评分")
        logger.info("-" * 60)
        
        await submit_scores(db, first, j1, {c.id: 8 for c in criteria}, feedback="Solid demo")
        await submit_scores(db, first, j2, {c.id: 7 for c in criteria})
        await submit_scores(db, second, j1, {c.id: 9 for c in criteria})
        # 部分评分：只打了第一个维度
        await submit_scores(db, third, j2, {criteria[0].id: 10})
        
        worklist = await list_entries_for_judge(db, j2)
        for progress in worklist.to_judge:
            logger.info(
                f"  待评: {progress.title} "
                f"({progress.scored_criteria}/{progress.total_criteria} criteria scored)"
            )
        
        # ============ 排名 ============
        logger.info("\n🏆 排名：")
        logger.info("-" * 60)
        
        ranked = await rank_entries(db, demo["competition_id"])
        for idx, ps in enumerate(filter_by_min_judges(ranked, 1), 1):
            logger.info(
                f"  {idx}. {ps.title} ({ps.team_name}): "
                f"加权 {ps.weighted_score:.2f} | 平均 {ps.average_score:.2f} | 评委 {ps.judge_count}"
            )
    
    logger.success("\n✅ 示例运行完成！")


if __name__ == "__main__":
    asyncio.run(main())
