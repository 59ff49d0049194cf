from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):
    app_name: str = 'Local-Library'

    database_url: str = 'sqlite+aiosqlite:///./catalog.db'
    echo_sql: bool = False

    log_level: str = 'INFO'

    host: str = '127.0.0.1'
    port: int = 8000
    reload: bool = False

    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

@lru_cache
def get_settings():
    return Settings()
