from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Override from environment (.env / deployment secrets)
    database_url: str = "sqlite:///./jobboard.db"
    secret_key: str = "replace-with-a-long-random-secret-key"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    bcrypt_rounds: int = 12
    app_env: str = "development"  # development, staging, production

    # CORS origins as comma-separated values
    # Example: "https://app.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:3000"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    log_sql: bool = False  # echo SQLAlchemy statements at INFO

    # List endpoints
    default_page_size: int = 10
    max_page_size: int = 50

    # A withdrawn application permanently occupies the (job, applicant) slot unless enabled.
    allow_reapply_after_withdrawal: bool = False

    # Request guards
    rate_limit_api_per_window: int = 100
    rate_limit_window_seconds: int = 15 * 60
    rate_limit_auth_per_min: int = 20

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
