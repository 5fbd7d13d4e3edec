"""API 路由定义"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from hackjudge.config import get_settings
from hackjudge.db.crud import get_active_judges, get_criteria, get_judge_for_user
from hackjudge.db.database import get_db
from hackjudge.judging import (
    NotFoundError,
    ScoreValidationError,
    add_default_criteria,
    filter_by_min_judges,
    get_entry_progress,
    get_existing_scores,
    list_entries_for_judge,
    rank_entries,
    submit_scores,
    total_weight,
)
from hackjudge.models.schemas import (
    CriterionResponse,
    EntryProgress,
    ExistingScoresResponse,
    JudgeResponse,
    JudgeWorklist,
    RankingResponse,
    ScoreSubmission,
    SubmissionResult,
)

router = APIRouter()


@router.post("/judging/{entry_id}", response_model=SubmissionResult)
async def submit_entry_scores(
    entry_id: int,
    submission: ScoreSubmission,
    db: AsyncSession = Depends(get_db),
):
    """
    提交评委对作品的评分（可以只包含部分维度）
    
    鉴权由上层应用负责，这里只校验作品、评委与维度的归属关系。
    """
    logger.info(f"收到评分提交: entry_id={entry_id}, judge_id={submission.judge_id}")
    
    try:
        return await submit_scores(
            db=db,
            entry_id=entry_id,
            judge_id=submission.judge_id,
            scores=submission.scores,
            feedback=submission.feedback,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ScoreValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"评分提交异常: {e}")
        raise HTTPException(status_code=500, detail=f"保存评分失败: {str(e)}")


@router.get("/judging/{entry_id}/judges/{judge_id}", response_model=ExistingScoresResponse)
async def get_entry_scores_for_judge(
    entry_id: int,
    judge_id: int,
    db: AsyncSession = Depends(get_db),
):
    """获取评委对作品已有的评分和反馈"""
    try:
        return await get_existing_scores(db, entry_id, judge_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/judging/{entry_id}/judges/{judge_id}/progress", response_model=EntryProgress)
async def get_progress(
    entry_id: int,
    judge_id: int,
    db: AsyncSession = Depends(get_db),
):
    """查询评委对作品的评分进度"""
    try:
        return await get_entry_progress(db, entry_id, judge_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/judges/{judge_id}/entries", response_model=JudgeWorklist)
async def get_judge_worklist(
    judge_id: int,
    db: AsyncSession = Depends(get_db),
):
    """评委的待评 / 已评作品列表"""
    try:
        return await list_entries_for_judge(db, judge_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/competitions/{competition_id}/criteria", response_model=List[CriterionResponse])
async def list_criteria(
    competition_id: int,
    db: AsyncSession = Depends(get_db),
):
    """获取比赛的评分维度（按权重降序）"""
    return await get_criteria(db, competition_id)


@router.get("/competitions/{competition_id}/judges", response_model=List[JudgeResponse])
async def list_judges(
    competition_id: int,
    db: AsyncSession = Depends(get_db),
):
    """获取比赛中所有在任评委"""
    return await get_active_judges(db, competition_id)


@router.get("/competitions/{competition_id}/judges/users/{user_id}", response_model=JudgeResponse)
async def get_judge_identity(
    competition_id: int,
    user_id: str,
    db: AsyncSession = Depends(get_db),
):
    """查询用户在某个比赛中的评委身份"""
    judge = await get_judge_for_user(db, user_id, competition_id)
    
    if judge is None:
        raise HTTPException(status_code=404, detail=f"用户不是该比赛的评委: {user_id}")
    
    return judge


@router.post("/competitions/{competition_id}/criteria/defaults")
async def create_default_criteria(
    competition_id: int,
    db: AsyncSession = Depends(get_db),
):
    """为还没有维度的比赛添加默认评分维度"""
    added = await add_default_criteria(db, competition_id)
    
    return {
        "success": True,
        "added": added,
        "message": "Default judging criteria added" if added else "Competition already has judging criteria",
    }


@router.get("/competitions/{competition_id}/results", response_model=RankingResponse)
async def get_results(
    competition_id: int,
    min_judges: Optional[int] = Query(None, ge=0, description="最少评委数，不足的作品不显示"),
    db: AsyncSession = Depends(get_db),
):
    """
    比赛排名结果
    
    排名先对所有作品计算，再按最少评委数过滤，过滤不会改变剩余作品的顺序。
    """
    if min_judges is None:
        min_judges = get_settings().default_min_judge_count
    
    try:
        criteria = await get_criteria(db, competition_id)
        ranked = await rank_entries(db, competition_id, criteria=criteria)
    except Exception as e:
        logger.error(f"计算排名失败: {e}")
        raise HTTPException(status_code=500, detail=f"计算排名失败: {str(e)}")
    
    return RankingResponse(
        competition_id=competition_id,
        total_weight=total_weight(criteria),
        min_judges=min_judges,
        results=filter_by_min_judges(ranked, min_judges),
    )


@router.get("/health")
async def health_check():
    """健康检查接口"""
    return {"status": "ok", "message": "Hackathon judging engine is running"}
