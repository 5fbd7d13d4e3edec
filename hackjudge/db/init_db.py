"""数据库初始化脚本：创建评审计分所需的全部表"""

import asyncio

from loguru import logger

from hackjudge.config import get_settings
from hackjudge.db.database import init_database
from hackjudge.models.database import Base


async def main():
    """初始化数据库"""
    settings = get_settings()
    
    logger.info(f"开始初始化数据库: {settings.database_url}")
    await init_database()
    logger.success(f"数据库初始化完成，共 {len(Base.metadata.tables)} 张表: {', '.join(sorted(Base.metadata.tables))}")


if __name__ == "__main__":
    asyncio.run(main())
