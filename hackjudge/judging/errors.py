"""评审引擎异常"""


class JudgingError(Exception):
    """评审引擎异常基类"""


class ScoreValidationError(JudgingError):
    """评分不合法：分数越界，或一次提交中没有任何有效评分"""


class NotFoundError(JudgingError):
    """作品、评委或评分维度不存在，或不属于同一个比赛"""
