"""YAML設定ファイルの読み込みと環境変数展開"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from gptbridge.config.models import (
    Config,
    HealthConfig,
    LoggingConfig,
    OpenAIConfig,
    SessionConfig,
    SlackConfig,
)
from gptbridge.domain.services import MIN_CHUNK_SIZE


class StartupConfigError(Exception):
    """起動時の設定エラーの基底例外"""


class ConfigValidationError(StartupConfigError):
    """設定値のバリデーションエラー"""


class EnvironmentVariableError(StartupConfigError):
    """環境変数が見つからないエラー"""


# 環境変数パターン: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

# 設定ファイルがない場合に参照する環境変数
SLACK_BOT_TOKEN_ENV = "SLACK_BOT_TOKEN"
SLACK_APP_TOKEN_ENV = "SLACK_APP_TOKEN"
OPENAI_API_KEY_ENV = "OPENAI_API_KEY"

# 正の値でなければならないセッション設定
_POSITIVE_SESSION_FIELDS = (
    "context_window",
    "max_turns",
    "inactivity_timeout_seconds",
    "chunk_size",
    "reserve_tokens",
)


def expand_env_vars(value: str) -> str:
    """文字列中の ${VAR_NAME} を環境変数の値に置換する

    Args:
        value: 置換対象の文字列

    Returns:
        環境変数が展開された文字列

    Raises:
        EnvironmentVariableError: 環境変数が未設定
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    """データ構造を再帰的に走査し、文字列中の環境変数を展開する

    Args:
        data: 展開対象のデータ（dict, list, str, その他）

    Returns:
        環境変数が展開されたデータ
    """
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """必須フィールドの存在を検証する

    Args:
        data: 検証対象のdict
        field: フィールド名
        parent: 親フィールド名（エラーメッセージ用）

    Returns:
        フィールドの値

    Raises:
        ConfigValidationError: フィールドが存在しない、または空
    """
    if field not in data or data[field] is None or data[field] == "":
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _require_env(name: str) -> str:
    """環境変数を取得する（未設定・空ならエラー）"""
    value = os.environ.get(name)
    if not value:
        raise EnvironmentVariableError(f"Environment variable '{name}' is not set")
    return value


def _build_session_config(session_data: dict[str, Any] | None) -> SessionConfig:
    """SessionConfig を構築し、数値設定を検証する

    Raises:
        ConfigValidationError: 数値設定が正の値でない、または chunk_size が小さすぎる
    """
    session = SessionConfig(**(session_data or {}))
    for name in _POSITIVE_SESSION_FIELDS:
        if getattr(session, name) <= 0:
            raise ConfigValidationError(f"'session.{name}' must be positive")
    if session.baseline_tokens < 0:
        raise ConfigValidationError("'session.baseline_tokens' must not be negative")
    if session.chunk_size < MIN_CHUNK_SIZE:
        raise ConfigValidationError(
            f"'session.chunk_size' must be at least {MIN_CHUNK_SIZE} bytes"
        )
    return session


def _build_logging_config(logging_data: dict[str, Any] | None) -> LoggingConfig | None:
    if not logging_data:
        return None
    return LoggingConfig(
        level=logging_data.get("level", "INFO"),
        format=logging_data.get(
            "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ),
        loggers=logging_data.get("loggers"),
        debug_llm_messages=logging_data.get("debug_llm_messages", False),
    )


def load_config(path: str | Path) -> Config:
    """設定ファイルを読み込む

    Args:
        path: config.yaml のパス

    Returns:
        Config オブジェクト

    Raises:
        FileNotFoundError: ファイルが存在しない
        ConfigValidationError: 必須項目が欠落、または不正な値
        EnvironmentVariableError: 環境変数が未設定
        yaml.YAMLError: YAML構文エラー
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f) or {}

    # 環境変数を展開
    data = _expand_recursive(raw_data)

    # 必須セクションの検証
    slack_data = _validate_required_field(data, "slack")
    openai_data = _validate_required_field(data, "openai")

    # SlackConfig
    slack = SlackConfig(
        bot_token=_validate_required_field(slack_data, "bot_token", "slack"),
        app_token=_validate_required_field(slack_data, "app_token", "slack"),
    )

    # OpenAIConfig
    openai = OpenAIConfig(
        api_key=_validate_required_field(openai_data, "api_key", "openai"),
        base_url=openai_data.get("base_url", "https://api.openai.com/v1").rstrip("/"),
        chat_model=openai_data.get("chat_model", "gpt-3.5-turbo"),
        image_size=openai_data.get("image_size", "1024x1024"),
        timeout_seconds=openai_data.get("timeout_seconds", 60.0),
    )

    try:
        session = _build_session_config(data.get("session"))
        health = HealthConfig(**(data.get("health") or {}))
    except TypeError as e:
        raise ConfigValidationError(f"Unknown configuration field: {e}") from e

    return Config(
        slack=slack,
        openai=openai,
        session=session,
        health=health,
        logging=_build_logging_config(data.get("logging")),
    )


def load_config_from_env() -> Config:
    """環境変数のみから設定を構築する

    設定ファイルが存在しない場合に使用する。認証情報以外はデフォルト値。

    Returns:
        Config オブジェクト

    Raises:
        EnvironmentVariableError: 必須の環境変数が未設定
    """
    return Config(
        slack=SlackConfig(
            bot_token=_require_env(SLACK_BOT_TOKEN_ENV),
            app_token=_require_env(SLACK_APP_TOKEN_ENV),
        ),
        openai=OpenAIConfig(api_key=_require_env(OPENAI_API_KEY_ENV)),
        session=SessionConfig(),
        health=HealthConfig(),
    )
