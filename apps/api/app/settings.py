from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM Configuration
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    synthesis_model: str = "gpt-4o-mini"
    synthesis_reasoning_effort: str | None = None
    refine_model: str = "gpt-4o-mini"

    # Reference verification
    verify_concurrency: int = 1
    drop_dangling_edges: bool = False

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = True

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_all: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
