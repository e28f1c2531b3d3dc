from pathlib import Path
from typing import Optional

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

import os

# Load .env for local/dev environments only for values missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Engine settings pulled from TOPO_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="TOPO_", extra="ignore")

    # Thresholds
    contour_interval: float = Field(
        default=20.0, gt=0, description="Vertical distance between bands for the empty preset"
    )

    simplify: float = Field(
        default=0.0, ge=0, description="Ring simplification tolerance in grid cells, 0 keeps every vertex"
    )

    # Growth
    z_delta: float = Field(default=100.0, description="Height deposited on the raised cell")
    density: float = Field(
        default=4.0, gt=0, description="Divisor applied to z_delta for the 8 neighbours"
    )
    diffusion_depth: int = Field(
        default=2, ge=0, description="Neighbourhood rings smoothed after each deposit"
    )

    # Initial fill
    baseline: float = Field(default=10.0, description="Value of every cell in an empty field")
    random_center: float = Field(default=0.5, ge=0, lt=1, description="Mean of the unit Gaussian sampler")
    random_std_dev: float = Field(default=0.1, gt=0, description="Std-dev of the unit Gaussian sampler")
    random_scale: float = Field(default=100.0, gt=0, description="Scale from [0, 1) samples to heights")
    max_resample_attempts: int = Field(
        default=64, ge=1, description="Draws per value before the sampler falls back to its center"
    )
    random_seed: Optional[str] = Field(default=None, description="Seed for the Alea PRNG")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (console or json)")


# Instantiate singleton settings object
settings = Settings()
