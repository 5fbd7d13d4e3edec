"""Pydantic 数据模型（API 请求/响应）"""

from typing import Optional, List, Dict, Union
from pydantic import BaseModel, Field, StrictFloat, StrictInt


# ============ 请求模型 ============

class ScoreSubmission(BaseModel):
    """评委提交评分的请求（可以只包含部分维度）"""
    judge_id: int = Field(..., description="评委身份 ID（调用方负责鉴权）")
    scores: Dict[int, Optional[Union[StrictInt, StrictFloat]]] = Field(
        default_factory=dict,
        description="criterion_id → 分数，空值表示该维度本次未评分（只接受数字，不接受布尔值或字符串）",
    )
    feedback: Optional[str] = Field(None, description="对该作品的文字反馈，不传则保持原有反馈")
    
    class Config:
        json_schema_extra = {
            "example": {
                "judge_id": 1,
                "scores": {"1": 8, "2": 6, "3": None},
                "feedback": "创意很好，技术实现还有提升空间",
            }
        }


# ============ 响应模型 ============

class CriterionResponse(BaseModel):
    """评分维度"""
    id: int
    competition_id: int
    name: str
    description: Optional[str] = None
    weight: float = Field(..., description="相对权重")
    max_score: int = Field(..., description="最高分")
    
    class Config:
        from_attributes = True


class CriterionScore(BaseModel):
    """单个维度的汇总得分"""
    name: str = Field(..., description="维度名称")
    weight: float = Field(..., description="维度权重")
    average_score: float = Field(..., description="所有评委在该维度上的平均分")
    weighted_score: float = Field(..., description="平均分 × 权重")


class ProjectScore(BaseModel):
    """作品汇总得分（按需计算，不落库）"""
    entry_id: int
    title: str
    team_id: int
    team_name: str
    average_score: float = Field(..., description="各维度平均分的平均值（不加权）")
    weighted_score: float = Field(..., description="加权总分 / 总权重")
    judge_count: int = Field(..., description="给该作品打过分的不同评委数")
    criteria_scores: Dict[int, CriterionScore] = Field(default_factory=dict)


class RankingResponse(BaseModel):
    """比赛排名结果"""
    competition_id: int
    total_weight: float
    min_judges: int
    results: List[ProjectScore] = Field(default_factory=list)


class JudgeResponse(BaseModel):
    """评委身份"""
    id: int
    user_id: str
    competition_id: int
    is_active: bool
    
    class Config:
        from_attributes = True


class EntryProgress(BaseModel):
    """某评委对某作品的评分进度"""
    entry_id: int
    title: str
    team_id: int
    team_name: str
    scored_criteria: int = Field(..., description="已评分维度数")
    total_criteria: int = Field(..., description="比赛维度总数")
    is_complete: bool


class JudgeWorklist(BaseModel):
    """评委的待评 / 已评作品列表"""
    judge_id: int
    competition_id: int
    to_judge: List[EntryProgress] = Field(default_factory=list)
    judged: List[EntryProgress] = Field(default_factory=list)


class SubmissionResult(BaseModel):
    """提交评分的结果"""
    entry_id: int
    judge_id: int
    created: List[int] = Field(default_factory=list, description="新插入的 criterion_id")
    updated: List[int] = Field(default_factory=list, description="原地更新的 criterion_id")
    scored_criteria: int
    total_criteria: int
    is_complete: bool


class ExistingScoresResponse(BaseModel):
    """评委对某作品已有的评分（用于恢复评分表单）"""
    entry_id: int
    judge_id: int
    scores: Dict[int, float] = Field(default_factory=dict)
    feedback: Optional[str] = None
