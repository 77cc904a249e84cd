"""
Engine configuration

Settings are read from the environment (prefix OPENGOV_) or a .env file.
"""

import logging
from functools import lru_cache
from typing import Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .networks import NetworkDetails, get_network

logger = logging.getLogger(__name__)


class EngineSettings(BaseSettings):
    """Runtime settings for the governance engine"""

    model_config = SettingsConfigDict(
        env_prefix="OPENGOV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_network: str = Field("polkadot", description="Network used when none is given")
    vote_locking_period: Optional[int] = Field(
        None, description="Override of the network's vote locking period, in blocks"
    )
    conviction_multipliers: Optional[str] = Field(
        None, description="Comma separated override of the conviction lock multipliers"
    )
    log_level: str = Field("INFO")

    @property
    def multiplier_override(self) -> Optional[Tuple[int, ...]]:
        if not self.conviction_multipliers:
            return None
        return tuple(int(m) for m in self.conviction_multipliers.split(","))

    @field_validator("default_network")
    @classmethod
    def lower_network(cls, v):
        return v.lower()

    @field_validator("conviction_multipliers")
    @classmethod
    def validate_multipliers(cls, v):
        if v is None or not v.strip():
            return None
        parts = [m.strip() for m in v.strip().strip("[]").split(",") if m.strip()]
        try:
            multipliers = [int(m) for m in parts]
        except ValueError:
            raise ValueError(f"Conviction multipliers must be comma separated integers, got '{v}'")
        if not multipliers or any(m < 0 for m in multipliers):
            raise ValueError(f"Conviction multipliers must be non-negative integers, got '{v}'")
        return ",".join(str(m) for m in multipliers)


@lru_cache()
def get_settings() -> EngineSettings:
    return EngineSettings()


def configure_logging(settings: Optional[EngineSettings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())


def lock_parameters(
    network: Optional[str] = None,
    settings: Optional[EngineSettings] = None
) -> Tuple[int, Tuple[int, ...]]:
    """Effective vote locking period and conviction multipliers for a network"""
    settings = settings or get_settings()
    details: NetworkDetails = get_network(network or settings.default_network)

    lock_period = details.vote_locking_period
    if settings.vote_locking_period is not None:
        logger.info(
            f"Overriding {details.name} vote locking period "
            f"{lock_period} -> {settings.vote_locking_period}"
        )
        lock_period = settings.vote_locking_period

    multipliers = details.conviction_multipliers
    if settings.multiplier_override:
        multipliers = settings.multiplier_override
        if len(multipliers) != len(details.conviction_multipliers):
            logger.warning(
                f"Conviction multiplier override has {len(multipliers)} entries, "
                f"expected {len(details.conviction_multipliers)}"
            )

    return lock_period, multipliers
