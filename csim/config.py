from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import yaml

from .cache.cache_config import CacheConfiguration, CostModel, validate_configuration
from .errors import ConfigurationError


@dataclass
class SimConfig:
    """Settings for one csim run, as given on the command line or in YAML."""
    # Cache geometry
    num_sets: int = 1
    blocks_per_set: int = 1
    block_size: int = 4

    # Policies, in their command-line spelling
    write_alloc: str = "write-allocate"
    write_policy: str = "write-back"
    evict_policy: str = "lru"

    # Cost model
    hit_cycles: int = 1
    memory_cycles: int = 100
    word_bytes: int = 4

    # Trace input ('-' is stdin)
    trace: str = "-"
    strict_trace: bool = False

    # Reporting
    report_dir: str | None = None
    log_level: str = "WARNING"

    config_file: str = ""

    def update_from_yaml(self, yaml_path: str):
        """Updates config fields from a YAML file."""
        with open(yaml_path, 'r') as f:
            yaml_config = yaml.safe_load(f) or {}
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Config file {yaml_path} must contain a mapping.")
        for key, value in yaml_config.items():
            if hasattr(self, key):
                if isinstance(getattr(self, key), bool) and not isinstance(value, bool):
                    raise ConfigurationError(f"Config value '{key}' must be true or false, got {value!r}.")
                setattr(self, key, value)

    @classmethod
    def from_args(cls, args) -> SimConfig:
        """Factory method to create a SimConfig from parsed argparse arguments."""
        config = cls()

        # 1. Load from YAML config file if provided
        if getattr(args, 'config', None):
            config.config_file = args.config
            if not Path(config.config_file).exists():
                raise ConfigurationError(f"Config file {config.config_file} not found.")
            config.update_from_yaml(config.config_file)

        # 2. Override with command-line arguments
        arg_dict = vars(args)
        for key, value in arg_dict.items():
            if value is not None and hasattr(config, key):
                setattr(config, key, value)
        return config

    def cost_model(self) -> CostModel:
        return CostModel(hit_cycles=self.hit_cycles, memory_cycles=self.memory_cycles,
                         word_bytes=self.word_bytes)

    def to_cache_configuration(self) -> CacheConfiguration:
        """Validates the raw settings and returns the cache configuration."""
        return validate_configuration(
            self.num_sets, self.blocks_per_set, self.block_size,
            self.write_alloc, self.write_policy, self.evict_policy,
            cost=self.cost_model(),
        )
