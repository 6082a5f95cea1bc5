"""
Configuration Module
Reads engine and logging preferences from the environment.
"""

import os
from dataclasses import dataclass
from typing import Optional


ENV_AES_ENGINE = 'CBCHS_AES_ENGINE'
ENV_LOG_LEVEL = 'CBCHS_LOG_LEVEL'


@dataclass(frozen=True)
class Config:
    """Runtime settings for engine selection and logging."""
    aes_engine: Optional[str] = None
    log_level: str = 'WARNING'


def load_config(environ=None):
    """
    Load configuration from environment or use defaults.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Config: Frozen configuration
    """
    if environ is None:
        return Config(
            aes_engine=os.getenv(ENV_AES_ENGINE) or None,
            log_level=os.getenv(ENV_LOG_LEVEL, 'WARNING').upper(),
        )

    return Config(
        aes_engine=environ.get(ENV_AES_ENGINE) or None,
        log_level=environ.get(ENV_LOG_LEVEL, 'WARNING').upper(),
    )
