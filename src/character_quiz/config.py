"""
character-quiz configuration

Catalog location, generator limits, UI defaults and logging level live here.
Environment variables override defaults for deployment flexibility.
"""

import os
from dataclasses import dataclass, field
from typing import Literal


@dataclass
class CatalogConfig:
    """Where characters come from"""
    base_url: str = os.getenv("CATALOG_URL", "https://rickandmortyapi.com/api/character")


@dataclass
class QuizConfig:
    """Question generation limits"""
    # Upper bound on id draws while looking for four distinct wrong answers
    max_draws_per_question: int = int(os.getenv("MAX_DRAWS_PER_QUESTION", "200"))


@dataclass
class UIConfig:
    """Terminal presentation"""
    default_theme: Literal["light", "dark", "system"] = os.getenv("DEFAULT_THEME", "dark")
    theme_storage_key: str = os.getenv("THEME_STORAGE_KEY", "ui-theme")
    color: bool = os.getenv("NO_COLOR") is None


@dataclass
class LoggingConfig:
    """Root logger setup used by the CLI"""
    level: str = os.getenv("LOG_LEVEL", "WARNING")
    format: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass
class Config:
    """Master config, import this"""
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    quiz: QuizConfig = field(default_factory=QuizConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Singleton
config = Config()
