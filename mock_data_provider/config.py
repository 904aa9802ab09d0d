"""
Configuration

Everything the services need is carried by StoreConfig and passed in
explicitly; environment variables are only read by the entry points.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_PORT = 3000
DEFAULT_DATA_DIR = "logs"
DEFAULT_STEP_UNIT = "minute"
DEFAULT_MAX_STEP = 60
STEP_UNITS = ("minute", "second")


@dataclass
class StoreConfig:
    """Where data lives and how densely articles are spaced"""

    data_dir: Path = field(default_factory=lambda: Path(DEFAULT_DATA_DIR))
    article_step_unit: str = DEFAULT_STEP_UNIT  # "minute" or "second"
    article_max_step: int = DEFAULT_MAX_STEP  # articles are 1..max_step units apart

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir)
        if self.article_step_unit not in STEP_UNITS:
            raise ValueError(f"Invalid article step unit: {self.article_step_unit}")
        if self.article_max_step < 1:
            raise ValueError(f"Invalid article max step: {self.article_max_step}")


def get_port() -> int:
    """Get server port from environment or use default"""
    port_str = os.environ.get("PORT", str(DEFAULT_PORT))
    try:
        return int(port_str)
    except ValueError:
        msg = f"Invalid PORT value: {port_str}"
        raise ValueError(msg) from None


def get_config() -> StoreConfig:
    """Build the store configuration from environment variables"""
    max_step = os.environ.get("ARTICLE_MAX_STEP", str(DEFAULT_MAX_STEP))
    try:
        article_max_step = int(max_step)
    except ValueError:
        msg = f"Invalid ARTICLE_MAX_STEP value: {max_step}"
        raise ValueError(msg) from None

    return StoreConfig(
        data_dir=Path(os.environ.get("DATA_DIR", DEFAULT_DATA_DIR)),
        article_step_unit=os.environ.get("ARTICLE_STEP_UNIT", DEFAULT_STEP_UNIT),
        article_max_step=article_max_step,
    )
