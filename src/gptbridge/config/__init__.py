"""設定管理モジュール"""

from gptbridge.config.loader import (
    ConfigValidationError,
    EnvironmentVariableError,
    StartupConfigError,
    expand_env_vars,
    load_config,
    load_config_from_env,
)
from gptbridge.config.models import (
    Config,
    HealthConfig,
    LoggingConfig,
    OpenAIConfig,
    SessionConfig,
    SlackConfig,
)

__all__ = [
    "Config",
    "ConfigValidationError",
    "EnvironmentVariableError",
    "HealthConfig",
    "LoggingConfig",
    "OpenAIConfig",
    "SessionConfig",
    "SlackConfig",
    "StartupConfigError",
    "expand_env_vars",
    "load_config",
    "load_config_from_env",
]
