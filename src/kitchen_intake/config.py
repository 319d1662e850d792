import logging

from pydantic_settings import BaseSettings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseSettings):
    # Product matcher
    match_max_results: int = 5

    # Duplicate detector
    duplicate_similarity_threshold: float = 0.7
    duplicate_max_results: int = 5

    # Review thresholds ("< 0.7 needs review")
    low_confidence_threshold: float = 0.7
    high_match_threshold: float = 0.8

    # Ingredient → inventory matching
    ingredient_match_threshold: float = 0.3
    ingredient_max_suggestions: int = 5

    # Menu validation
    menu_similar_item_threshold: float = 0.8
    recipe_link_threshold: float = 0.7

    # Log
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Install the root handler used by scripts and callers embedding the pipeline."""
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
