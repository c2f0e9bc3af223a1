from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "ToolLink Admin"
    API_PREFIX: str = "/api/v1"
    INVENTORY_API_URL: str = "http://localhost:5001/api"
    REQUEST_TIMEOUT_SECONDS: float = 10.0
    DEFAULT_WAREHOUSE: str = "WM"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    class Config:
        env_file = ".env"


settings = Settings()
