from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Sticker Store API"
    DATABASE_URL: str = "sqlite:///./sticker_store.db"
    SECRET_KEY: str = "supersecretkey_change_me_in_production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7 # 1 week

    # Cart storage: "database" keeps carts in the cartsession table, "memory" in-process
    CART_STORE: str = "database"
    SESSION_COOKIE_NAME: str = "cart_session"
    MEMORY_CART_MAX_SESSIONS: int = 10000

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
