from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    gemini_api_key: str = ""
    debug: bool = False
    log_level: str = "INFO"

    # Embedding provider settings
    embedding_provider: str = "gemini"  # "gemini" | "local"
    embedding_model: str = "gemini-embedding-001"
    local_embedding_model: str = "all-MiniLM-L6-v2"
    embedding_batch_size: int = 100  # strings per provider request
    embedding_timeout_ms: int = 30000
    embedding_cache_max_size: int = 10000  # 0 = unbounded

    # Clustering settings
    lexical_iterations: int = 20
    semantic_max_iterations: int = 50
    semantic_match_threshold: float = 0.75
    default_skill_weight: float = 1.0

    # Layout
    sphere_radius: float = 9.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
