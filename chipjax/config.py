"""Emulator configuration.

Defaults live in ``EmulatorConfig``; a YAML file and dotlist overrides
(``["scale=10", "trace=true"]``) are merged on top with OmegaConf, which
also type-checks every value against the dataclass.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from omegaconf import OmegaConf

from chipjax.logging import LEVELS
from chipjax.rendering import COLOR_SCHEMES


@dataclass
class EmulatorConfig:
    instructions_per_second: int = 840
    timer_frequency: int = 60
    scale: int = 20
    color_scheme: str = "white"
    seed: int = 0
    log_level: str = "INFO"
    # Log every executed instruction at DEBUG level
    trace: bool = False


def load_config(path: Optional[str] = None, overrides: Optional[Sequence[str]] = None) -> EmulatorConfig:
    """Merge defaults, an optional YAML file and dotlist overrides."""
    config = OmegaConf.structured(EmulatorConfig)
    if path:
        config = OmegaConf.merge(config, OmegaConf.load(path))
    if overrides:
        config = OmegaConf.merge(config, OmegaConf.from_dotlist(list(overrides)))

    if config.instructions_per_second <= 0:
        raise ValueError(f"instructions_per_second must be positive, got {config.instructions_per_second}")
    if config.timer_frequency <= 0:
        raise ValueError(f"timer_frequency must be positive, got {config.timer_frequency}")
    if config.scale <= 0:
        raise ValueError(f"scale must be positive, got {config.scale}")
    if config.log_level.upper() not in LEVELS:
        raise ValueError(f"log_level must be one of {list(LEVELS)}, got '{config.log_level}'")
    if config.color_scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"color_scheme must be one of {list(COLOR_SCHEMES)}, got '{config.color_scheme}'"
        )

    return OmegaConf.to_object(config)
