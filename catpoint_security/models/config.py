"""Configuration data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SystemConfig:
    """System configuration settings."""
    # Image analysis
    cat_confidence_threshold: float = 0.5
    classifier_seed: Optional[int] = None

    # Status store
    store_backend: str = "memory"  # memory, sqlite
    database_path: str = "data/security.db"

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[str] = None
