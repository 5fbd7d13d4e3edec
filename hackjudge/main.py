"""FastAPI 主应用"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from hackjudge import __version__
from hackjudge.config import get_settings
from hackjudge.db.database import init_database
from hackjudge.api.routes import router
from hackjudge.logger import setup_logger

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    setup_logger()
    
    logger.info("=" * 60)
    logger.info("评审计分服务正在启动...")
    logger.info("=" * 60)
    
    # 初始化数据库
    try:
        await init_database()
        logger.success("数据库初始化完成")
    except Exception as e:
        logger.error(f"数据库初始化失败: {e}")
        raise
    
    logger.success("系统启动完成！")
    logger.info(f"API 文档地址: http://{settings.server_host}:{settings.server_port}/docs")
    
    yield
    
    logger.info("评审计分服务正在关闭...")


# 创建 FastAPI 应用
app = FastAPI(
    title="Hackathon Judging Engine",
    description="黑客松多评委评分汇总与排名",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# 配置 CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 生产环境请配置具体域名
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(router, prefix="/api", tags=["评审系统"])


@app.get("/")
async def root():
    """根路径"""
    return {
        "message": "Hackathon Judging Engine",
        "version": __version__,
        "docs": "/docs",
        "api_prefix": "/api",
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "hackjudge.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=True,
        log_level="info",
    )
