"""数据库连接和会话管理"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from hackjudge.config import get_settings
from hackjudge.models.database import Base

settings = get_settings()

# 创建异步引擎
engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,  # 设置为 True 可以看到 SQL 日志
)

# 创建异步会话工厂
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db():
    """获取数据库会话（依赖注入）"""
    async with AsyncSessionLocal() as session:
        yield session


async def init_database():
    """初始化数据库（创建所有表，已存在的表不会重建）"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
