"""Central configuration defaults for qr_symbol."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EncoderConfig:
    ec_level: str = "M"
    max_version: int = 10
    mask_workers: int = 1  # >1 scores the eight mask trials on a thread pool
    seed: int = 0


DEFAULTS = EncoderConfig()


def get_config() -> EncoderConfig:
    """Return a copy of the default configuration."""

    return EncoderConfig(**DEFAULTS.__dict__)
