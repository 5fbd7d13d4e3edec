"""汇总与排名：把原始评分合成为每个作品的加权得分并排序"""

from collections import defaultdict
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from hackjudge.db.crud import get_criteria, get_ranking_snapshot
from hackjudge.judging.criteria import total_weight
from hackjudge.models.schemas import CriterionScore, ProjectScore

# 比较加权得分时保留的小数位，避免浮点误差影响并列判断
SCORE_PRECISION = 9


class EntryRecord(NamedTuple):
    """参与排名的作品"""
    entry_id: int
    title: str
    team_id: int
    team_name: str


class ScoreRecord(NamedTuple):
    """单条评分"""
    entry_id: int
    judge_id: int
    criterion_id: int
    value: float


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def score_entry(
    entry: EntryRecord,
    criteria: Sequence,
    scores: Iterable[ScoreRecord],
) -> ProjectScore:
    """
    计算单个作品的汇总得分
    
    - 每个维度：所有评委分数的平均值（没有分数记 0），再乘以权重
    - judge_count：打过分的不同评委数
    - average_score：各维度平均分的平均值（不加权，没有分数的维度也计 0）
    - weighted_score：加权得分之和 / 权重之和（总权重为 0 时记 0）
    """
    values_by_criterion: Dict[int, List[float]] = defaultdict(list)
    judge_ids = set()
    
    for score in scores:
        values_by_criterion[score.criterion_id].append(score.value)
        judge_ids.add(score.judge_id)
    
    criteria_scores = {}
    weighted_sum = 0.0
    
    for criterion in criteria:
        average = _mean(values_by_criterion.get(criterion.id, []))
        weighted = average * criterion.weight
        
        criteria_scores[criterion.id] = CriterionScore(
            name=criterion.name,
            weight=criterion.weight,
            average_score=average,
            weighted_score=weighted,
        )
        weighted_sum += weighted
    
    weight = total_weight(criteria)
    
    return ProjectScore(
        entry_id=entry.entry_id,
        title=entry.title,
        team_id=entry.team_id,
        team_name=entry.team_name,
        average_score=_mean([cs.average_score for cs in criteria_scores.values()]),
        weighted_score=weighted_sum / weight if weight > 0 else 0.0,
        judge_count=len(judge_ids),
        criteria_scores=criteria_scores,
    )


def rank_project_scores(project_scores: Sequence[ProjectScore]) -> List[ProjectScore]:
    """
    按加权得分降序排序
    
    得分相同时保持输入顺序（即作品创建时间、作品 ID 升序）。
    """
    ordered = sorted(
        enumerate(project_scores),
        key=lambda item: (-round(item[1].weighted_score, SCORE_PRECISION), item[0]),
    )
    return [project_score for _, project_score in ordered]


def compute_project_scores(
    criteria: Sequence,
    entries: Sequence[EntryRecord],
    scores: Iterable[ScoreRecord],
) -> List[ProjectScore]:
    """对一组作品计算汇总得分并排名，没有评分的作品也会出现在结果中"""
    scores_by_entry: Dict[int, List[ScoreRecord]] = defaultdict(list)
    for score in scores:
        scores_by_entry[score.entry_id].append(score)
    
    project_scores = []
    for entry in entries:
        project_score = score_entry(entry, criteria, scores_by_entry.get(entry.entry_id, []))
        logger.debug(
            f"作品得分: entry_id={entry.entry_id}, 加权={project_score.weighted_score:.4f}, "
            f"评委数={project_score.judge_count}"
        )
        project_scores.append(project_score)
    
    return rank_project_scores(project_scores)


def filter_by_min_judges(project_scores: Sequence[ProjectScore], min_judges: int) -> List[ProjectScore]:
    """过滤掉评委数不足的作品（展示层使用，不改变剩余作品的相对顺序）"""
    return [ps for ps in project_scores if ps.judge_count >= min_judges]


async def rank_entries(
    db: AsyncSession,
    competition_id: int,
    criteria: Optional[Sequence] = None,
) -> List[ProjectScore]:
    """
    计算比赛中所有已提交作品的排名
    
    Args:
        db: 数据库会话
        competition_id: 比赛 ID
        criteria: 已读取的评分维度，调用方需要同一份维度（如总权重）时传入
    
    Returns:
        按加权得分降序排列的 ProjectScore 列表
    """
    if criteria is None:
        criteria = await get_criteria(db, competition_id)
    rows = await get_ranking_snapshot(db, competition_id)
    
    entries: Dict[int, EntryRecord] = {}
    scores = []
    
    for entry_id, title, team_id, team_name, judge_id, criterion_id, value in rows:
        if entry_id not in entries:
            entries[entry_id] = EntryRecord(entry_id, title, team_id, team_name)
        if judge_id is not None:
            scores.append(ScoreRecord(entry_id, judge_id, criterion_id, value))
    
    ranked = compute_project_scores(criteria, list(entries.values()), scores)
    
    logger.info(
        f"排名计算完成: competition_id={competition_id}, 作品数={len(ranked)}, "
        f"评分记录数={len(scores)}, 维度数={len(criteria)}"
    )
    
    return ranked
