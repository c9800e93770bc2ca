"""Structured configuration for scripts that use the helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from omegaconf import DictConfig, OmegaConf

from .utils.logging import logger, setup_logging
from .utils.seed import seed_everything


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class TimingConfig:
    """Default intervals, in seconds."""

    tick_interval: float = 1.0
    debounce_delay: float = 0.5
    throttle_cooldown: float = 1.0


@dataclass
class DemoConfig:
    """Settings read by the simulated game loop in scripts/run_demo.py."""

    duration: float = 6.0
    players: List[str] = field(default_factory=list)
    # [name, weight] pairs
    loot: List[Any] = field(default_factory=list)


@dataclass
class GsuConfig:
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    seed: Optional[int] = None
    demo: DemoConfig = field(default_factory=DemoConfig)


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[List[str]] = None,
) -> DictConfig:
    """Merge defaults, an optional YAML file and dotlist overrides.

    Keys that are not part of :class:`GsuConfig` are rejected by omegaconf.
    """

    cfg = OmegaConf.structured(GsuConfig)
    if path is not None:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(Path(path)))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    return cfg


def configure(cfg: DictConfig) -> int:
    """Apply logging and seeding settings. Returns the seed in use."""

    log_file = Path(cfg.logging.file) if cfg.logging.file else None
    setup_logging(log_file=log_file, level=cfg.logging.level)
    seed = seed_everything(cfg.seed)
    logger.debug("configured with seed={seed}", seed=seed)
    return seed


__all__ = ["LoggingConfig", "TimingConfig", "DemoConfig", "GsuConfig", "load_config", "configure"]
