"""gptbridge: a Slack bot relaying thread conversations to an OpenAI-compatible API."""

__version__ = "0.1.0"
