from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # API Keys
    anthropic_api_key: str = ""

    # AI collaborator
    ai_model: str = "claude-haiku-4-5-20251001"
    ai_max_tokens: int = 800
    ai_search_max_uses: int = 5

    # Calculator
    calc_cache_size: int = 512  # Memoized (property, scenario) results

    # CLI
    api_base_url: str = "http://localhost:8000"

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
