"""設定データクラス"""

from dataclasses import dataclass


@dataclass
class SlackConfig:
    """Slack接続設定"""

    bot_token: str
    app_token: str


@dataclass
class OpenAIConfig:
    """OpenAI互換APIの接続設定"""

    api_key: str
    base_url: str = "https://api.openai.com/v1"
    chat_model: str = "gpt-3.5-turbo"
    image_size: str = "1024x1024"
    timeout_seconds: float = 60.0


@dataclass
class SessionConfig:
    """会話セッション設定

    Attributes:
        context_window: モデルのコンテキストウィンドウ（トークン数）
        baseline_tokens: セッション開始時のトークン使用量の初期値
        max_turns: 1セッションで受け付ける最大メッセージ数
        inactivity_timeout_seconds: 無操作でセッションを終了するまでの秒数
        chunk_size: 1メッセージあたりの最大バイト数
        reserve_tokens: 応答用に確保する最小トークン数
        keyword: セッションを開始するキーワード
        thread_title: スレッドの親メッセージ
        system_prompt: 履歴の先頭に置くシステムプロンプト（オプション）
    """

    context_window: int = 4096
    baseline_tokens: int = 8
    max_turns: int = 50
    inactivity_timeout_seconds: float = 6000
    chunk_size: int = 2000
    reserve_tokens: int = 16
    keyword: str = "!gpt"
    thread_title: str = "New GPT chat"
    system_prompt: str | None = None


@dataclass
class HealthConfig:
    """ヘルスチェックサーバー設定"""

    enabled: bool = False
    port: int = 8080


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """アプリケーション設定"""

    slack: SlackConfig
    openai: OpenAIConfig
    session: SessionConfig
    health: HealthConfig
    logging: LoggingConfig | None = None
