"""数据库模型定义"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Float,
    Integer,
    Text,
    Boolean,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Competition(Base):
    """比赛（黑客松）表，参考数据"""
    __tablename__ = "competitions"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # 关联关系
    criteria = relationship("Criterion", back_populates="competition", cascade="all, delete-orphan")
    judges = relationship("Judge", back_populates="competition", cascade="all, delete-orphan")


class Team(Base):
    """参赛队伍表"""
    __tablename__ = "teams"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    competition_id = Column(Integer, ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    entries = relationship("Entry", back_populates="team")


class Entry(Base):
    """参赛作品表（只有 is_submitted=True 的作品参与评分）"""
    __tablename__ = "entries"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    competition_id = Column(Integer, ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(300), nullable=False)
    is_submitted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # 关联关系
    team = relationship("Team", back_populates="entries")
    scores = relationship("Score", back_populates="entry", cascade="all, delete-orphan")


class Judge(Base):
    """评委身份表，每个身份只属于一个比赛"""
    __tablename__ = "judges"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(100), nullable=False, index=True)
    competition_id = Column(Integer, ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    competition = relationship("Competition", back_populates="judges")
    
    __table_args__ = (
        UniqueConstraint("user_id", "competition_id", name="unique_judge_competition"),
    )


class Criterion(Base):
    """评分维度表"""
    __tablename__ = "criteria"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    competition_id = Column(Integer, ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    weight = Column(Float, nullable=False, default=1.0)  # 相对权重，不要求总和固定
    max_score = Column(Integer, nullable=False, default=10)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    competition = relationship("Competition", back_populates="criteria")
    
    __table_args__ = (
        CheckConstraint("weight > 0", name="check_criterion_weight"),
        CheckConstraint("max_score > 0", name="check_criterion_max_score"),
    )


class Score(Base):
    """评分记录表：(作品, 评委, 维度) 唯一"""
    __tablename__ = "scores"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    entry_id = Column(Integer, ForeignKey("entries.id", ondelete="CASCADE"), nullable=False, index=True)
    judge_id = Column(Integer, ForeignKey("judges.id", ondelete="CASCADE"), nullable=False, index=True)
    criterion_id = Column(Integer, ForeignKey("criteria.id", ondelete="CASCADE"), nullable=False)
    value = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # 关联关系
    entry = relationship("Entry", back_populates="scores")
    criterion = relationship("Criterion")
    
    __table_args__ = (
        UniqueConstraint("entry_id", "judge_id", "criterion_id", name="unique_score"),
        CheckConstraint("value >= 0", name="check_score_value"),
    )


class JudgeFeedback(Base):
    """评委对作品的文字反馈，每个 (作品, 评委) 一条"""
    __tablename__ = "judge_feedback"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    entry_id = Column(Integer, ForeignKey("entries.id", ondelete="CASCADE"), nullable=False, index=True)
    judge_id = Column(Integer, ForeignKey("judges.id", ondelete="CASCADE"), nullable=False)
    feedback = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    __table_args__ = (
        UniqueConstraint("entry_id", "judge_id", name="unique_entry_judge_feedback"),
    )
