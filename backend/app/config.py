from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    app_name: str = "UserAuth"
    database_url: str = "sqlite:///userauth.db"
    host: str = "0.0.0.0"
    port: int = 8080
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_expire_minutes: int = 24 * 60
    log_level: str = "INFO"

    class Config:
        env_prefix = "USERAUTH_"


settings = Settings()
