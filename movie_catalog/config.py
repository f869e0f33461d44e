"""Application configuration loaded from environment variables."""

from functools import lru_cache  # build settings once per process

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	catalog_path: str = Field(default='data/movies.json')  # JSON array or .jsonl catalog file
	log_level: str = Field(default='INFO')  # loguru sink level
	abort_on_load_failure: bool = Field(default=False)  # refuse to start instead of serving an empty catalog

	model_config = SettingsConfigDict(env_prefix='MOVIE_CATALOG_', env_file='.env', env_file_encoding='utf-8', extra='ignore')


@lru_cache(maxsize=1)
def get_settings() -> Settings:
	"""Return cached settings instance."""
	return Settings()
