"""
Run configuration, loaded from YAML.

Example ``agglomerate.yml``::

    linkage: average
    cuts: [2, 3]
    live_only: false
    plot: false
    log_level: INFO
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import List, Union

import yaml

from .errors import InputError
from .linkage import SUPPORTED_LINKAGES
from .logger import get_logger

__all__ = ["ClusteringConfig", "load_config"]

logger = get_logger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ClusteringConfig:
    """Settings of one clustering run."""

    linkage: str = "single"
    cuts: List[int] = field(default_factory=list)
    live_only: bool = False
    plot: bool = False
    log_level: str = "INFO"

    def validate(self) -> "ClusteringConfig":
        """
        Check value ranges and types.

        @return: self
        @raises InputError: on the first invalid value
        """
        if self.linkage not in SUPPORTED_LINKAGES:
            raise InputError(
                f"Unsupported linkage {self.linkage!r}. Available: {', '.join(SUPPORTED_LINKAGES)}"
            )
        if not isinstance(self.cuts, list) or not all(
            isinstance(k, int) and not isinstance(k, bool) for k in self.cuts
        ):
            raise InputError(f"cuts must be a list of integers, got {self.cuts!r}")
        for name in ("live_only", "plot"):
            if not isinstance(getattr(self, name), bool):
                raise InputError(f"{name} must be true or false")
        if str(self.log_level).upper() not in _LOG_LEVELS:
            raise InputError(f"Unknown log level {self.log_level!r}")
        return self

    def override(self, **changes) -> "ClusteringConfig":
        """Copy with the given non-None values replaced."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None}).validate()


def load_config(path: Union[str, Path]) -> ClusteringConfig:
    """
    Load a ClusteringConfig from a YAML mapping.

    Missing keys keep their defaults; an empty file gives the defaults.

    @param path: path of the YAML file
    @return: validated ClusteringConfig
    @raises FileNotFoundError: if the file does not exist
    @raises InputError: on unknown keys, a non-mapping document or bad values
    """
    config_path = Path(path)
    logger.debug(f"Loading config from: {config_path}")
    if not config_path.exists():
        logger.error(f"Config file not found: {config_path}")
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            config_dict = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise InputError(f"Invalid YAML in {config_path}: {exc}") from exc

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise InputError(f"Config must be a mapping, got {type(config_dict).__name__}")

    known = {f.name for f in fields(ClusteringConfig)}
    unknown = sorted(set(config_dict) - known)
    if unknown:
        logger.error(f"Unknown config keys: {unknown}")
        raise InputError(f"Unknown config keys: {unknown}")

    if isinstance(config_dict.get("cuts"), int):
        config_dict["cuts"] = [config_dict["cuts"]]
    config = ClusteringConfig(**config_dict).validate()
    logger.debug(f"Loaded config: {config}")
    return config
