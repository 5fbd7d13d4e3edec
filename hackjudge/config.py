"""配置管理模块"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """系统配置"""
    
    # 数据库配置
    database_url: str = "sqlite+aiosqlite:///./hackjudge.db"
    database_echo: bool = False
    
    # 服务器配置
    server_host: str = "0.0.0.0"
    server_port: int = 8000
    
    # 日志配置
    log_dir: str = "logs"
    log_level: str = "INFO"
    
    # 结果页默认最少评委数
    default_min_judge_count: int = 1
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()
