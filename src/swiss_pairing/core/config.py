"""Configuration schemas and loading for Swiss pairing."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_MAX_STEPS = 200_000
DEFAULT_DB_FILENAME = "tournament.duckdb"


class PairingConfig(BaseModel):
    """Search budget and fallback policy for the pairing engine.

    Attributes:
        max_steps: Candidate attempts allowed before the strict search gives up.
        allow_repeat_byes: Retry with repeat byes permitted when the strict
            search fails.
        allow_unconstrained: As a last resort, produce a random pairing that
            may repeat opponents.
    """

    max_steps: int = Field(default=DEFAULT_MAX_STEPS, ge=1)
    allow_repeat_byes: bool = True
    allow_unconstrained: bool = True


class ScoringConfig(BaseModel):
    """Points and game credits folded into standing records."""

    win_points: int = Field(default=3, ge=0)
    tie_points: int = Field(default=1, ge=0)
    loss_points: int = Field(default=0, ge=0)
    bye_points: int = Field(default=3, ge=0)
    bye_game_wins: int = Field(default=2, ge=0)
    bye_counts_as_win: bool = True


class TournamentConfig(BaseModel):
    """Complete configuration for the round workflow."""

    pairing: PairingConfig = Field(default_factory=PairingConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    output_dir: str = "./runs"
    database_url: str | None = None
    seed: int | None = None

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is not None and "://" not in v:
            msg = "database_url must be a SQLAlchemy URL such as 'duckdb:///path.duckdb'"
            raise ValueError(msg)
        return v

    def get_database_url(self) -> str:
        """Get the configured URL or the default DuckDB file under output_dir."""
        if self.database_url:
            return self.database_url
        return f"duckdb:///{Path(self.output_dir) / DEFAULT_DB_FILENAME}"


def load_config(path: str | Path) -> TournamentConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Validated TournamentConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open() as f:
        data = yaml.safe_load(f)

    return TournamentConfig.model_validate(data or {})
