"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import NO_RETRY, CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .plm import PlmConfig, ServiceAccount, build_plm_config, get_plm_config

__all__ = [
    "NO_RETRY",
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "PlmConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "ServiceAccount",
    "build_plm_config",
    "configure_logging",
    "get_plm_config",
    "optional_env_var",
    "require_env_vars",
]
