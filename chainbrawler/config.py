"""
ChainBrawler client configuration management.

Loads configuration from chainbrawler_config.yml with environment variable overrides.
Uses Pydantic for validation and type safety.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path(__file__).parent / "chainbrawler_config.yml"


class LedgerConfig(BaseModel):
    """Ledger (contract) connection settings."""
    currency_symbol: str = Field(default="CFX", description="Native currency symbol used in formatted amounts")
    currency_decimals: int = Field(default=18, description="Decimals of the native currency")


class SessionConfig(BaseModel):
    """Per-player session settings."""
    claims_lookback_epochs: int = Field(default=5, description="How many past epochs to scan for claimable rewards")
    leaderboard_size: int = Field(default=10, description="Number of top players kept in the leaderboard")
    leaderboard_scan_limit: int = Field(default=100, description="Maximum players scanned when building the top list")
    leaderboard_batch_size: int = Field(default=25, description="Concurrent reads per leaderboard batch")
    event_dedupe_window: int = Field(default=256, description="Number of recent ledger logs remembered for de-duplication")


class ValidationConfig(BaseModel):
    """Bounds applied to user input before any ledger call."""
    max_character_class: int = Field(default=3, description="Highest valid character class id")
    min_enemy_id: int = Field(default=1, description="Lowest valid enemy id")
    max_enemy_id: int = Field(default=16, description="Highest valid enemy id")
    min_enemy_level: int = Field(default=1, description="Lowest valid enemy level")
    max_enemy_level: int = Field(default=100, description="Highest enemy level a fight may be started at")
    max_summary_enemy_level: int = Field(default=250, description="Highest enemy level accepted in a fight summary")


class DebugConfig(BaseModel):
    """Debug and development settings."""
    enabled: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")


class BrawlerConfig(BaseModel):
    """Complete client configuration."""
    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)

    @classmethod
    def from_yaml(cls, path: Optional[Path] = None) -> "BrawlerConfig":
        """Load configuration from YAML file."""
        path = path or DEFAULT_CONFIG_PATH

        if not path.exists():
            # Return default configuration
            config = cls(**cls._apply_env_overrides({}))
            cls().save(path)
            return config

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        # Apply environment variable overrides
        data = cls._apply_env_overrides(data)

        return cls(**data)

    @staticmethod
    def _apply_env_overrides(data: dict) -> dict:
        """Apply environment variable overrides to config data."""
        env_mappings = {
            "CHAINBRAWLER_CLAIMS_LOOKBACK": ("session", "claims_lookback_epochs"),
            "CHAINBRAWLER_LEADERBOARD_SIZE": ("session", "leaderboard_size"),
            "CHAINBRAWLER_MAX_ENEMY_ID": ("validation", "max_enemy_id"),
            "CHAINBRAWLER_MAX_ENEMY_LEVEL": ("validation", "max_enemy_level"),
            "CHAINBRAWLER_DEBUG": ("debug", "enabled"),
            "LOG_LEVEL": ("debug", "log_level"),
        }
        int_keys = {
            "claims_lookback_epochs",
            "leaderboard_size",
            "max_enemy_id",
            "max_enemy_level",
        }

        for env_var, (section, key) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                if section not in data or data[section] is None:
                    data[section] = {}

                # Convert types based on default
                if key in int_keys:
                    data[section][key] = int(value)
                elif key == "enabled":
                    data[section][key] = value.lower() in ("true", "1", "yes")
                else:
                    data[section][key] = value

        return data

    def save(self, path: Path) -> None:
        """Save configuration to file."""
        data = self.model_dump()
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def get_config() -> BrawlerConfig:
    """Get the singleton configuration instance."""
    if not hasattr(get_config, "_instance"):
        get_config._instance = BrawlerConfig.from_yaml()
    return get_config._instance


def reload_config(path: Optional[Path] = None) -> BrawlerConfig:
    """Reload configuration from file."""
    get_config._instance = BrawlerConfig.from_yaml(path)
    return get_config._instance
