from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_uri: str = "mongodb://localhost:27017"
    database_name: str = "job-portal-db"
    job_collection: str = "job"
    server_selection_timeout_ms: int = 5000

    jwt_access_token: str
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = 24 * 60 * 60  # 1 day
    cookie_name: str = "token"
    # Cross-site cookies require Secure when SameSite=None.
    cookie_secure: bool = True

    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:5174",
    ]
    host: str = "0.0.0.0"
    port: int = 5000

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
