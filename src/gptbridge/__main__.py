"""Application entry point."""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

import yaml

from gptbridge.application.handlers import CommandDispatcher
from gptbridge.application.services import SessionRegistry
from gptbridge.application.use_cases import (
    GenerateImageUseCase,
    StartConversationUseCase,
)
from gptbridge.config import (
    Config,
    LoggingConfig,
    StartupConfigError,
    load_config,
    load_config_from_env,
)
from gptbridge.infrastructure.events import MessageEventHub
from gptbridge.infrastructure.http import HealthServer
from gptbridge.infrastructure.llm import OpenAIClient
from gptbridge.infrastructure.slack import (
    SlackAppRunner,
    SlackEventAdapter,
    SlackMessagingService,
    build_app_manifest,
    create_slack_app,
)
from gptbridge.presentation import register_handlers

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    # Get root logger
    root_logger = logging.getLogger()

    # Set root level
    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    # Update handler format if specified
    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    # Configure individual loggers
    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gptbridge",
        description="Slack bot relaying thread conversations to an OpenAI-compatible API",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to the config file (default: config.yaml). "
        "Credentials are read from the environment when it does not exist.",
    )
    parser.add_argument(
        "--print-manifest",
        action="store_true",
        help="Print the Slack app manifest (slash commands, scopes) and exit",
    )
    return parser.parse_args(argv)


def read_config(config_path: Path) -> Config:
    """Load the config file, or build the config from the environment.

    Raises:
        StartupConfigError: A required setting or credential is missing.
    """
    if config_path.exists():
        logger.info("Loading config from %s", config_path)
        return load_config(config_path)
    logger.info("%s not found, reading credentials from the environment", config_path)
    return load_config_from_env()


async def main(config: Config) -> None:
    """アプリケーションを起動する"""
    configure_logging(config.logging)

    app = create_slack_app(config.slack)

    # Get bot user ID
    messaging_service = SlackMessagingService(app.client)
    bot_user_id = await messaging_service.get_bot_user_id()
    logger.info("Bot user ID: %s", bot_user_id)

    # Build dependencies
    hub = MessageEventHub()
    session_registry = SessionRegistry()
    debug_llm_messages = bool(config.logging and config.logging.debug_llm_messages)
    openai_client = OpenAIClient(config.openai, debug_llm_messages=debug_llm_messages)

    start_conversation = StartConversationUseCase(
        messaging_service=messaging_service,
        completion_service=openai_client,
        hub=hub,
        session_registry=session_registry,
        config=config.session,
        model=config.openai.chat_model,
    )
    generate_image = GenerateImageUseCase(image_service=openai_client)

    dispatcher = CommandDispatcher()
    dispatcher.register_handler(start_conversation.handle_command)
    dispatcher.register_handler(generate_image.execute)

    register_handlers(
        app,
        hub=hub,
        event_adapter=SlackEventAdapter(),
        dispatcher=dispatcher,
        start_conversation=start_conversation,
        bot_user_id=bot_user_id,
        keyword=config.session.keyword or None,
    )

    runner = SlackAppRunner(app, config.slack.app_token)
    health_server: HealthServer | None = None
    if config.health.enabled:
        health_server = HealthServer(
            slack_runner=runner,
            session_registry=session_registry,
            port=config.health.port,
        )
        await health_server.start()

    logger.info(
        "Starting Socket Mode handler (commands: %s)...", dispatcher.command_names
    )
    runner_task = asyncio.create_task(runner.start())

    # Setup signal handlers for graceful shutdown
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def shutdown_handler() -> None:
        logger.info("Received shutdown signal...")
        stop_event.set()

    loop.add_signal_handler(signal.SIGINT, shutdown_handler)
    loop.add_signal_handler(signal.SIGTERM, shutdown_handler)

    # Wait for shutdown signal
    await stop_event.wait()

    # Graceful shutdown
    logger.info("Shutting down...")

    await session_registry.shutdown(timeout=5.0)

    # Try to close runner with timeout
    closed = await runner.close(timeout=5.0)
    if not closed:
        logger.warning("Runner close timed out, cancelling tasks...")

    runner_task.cancel()
    await asyncio.gather(runner_task, return_exceptions=True)

    if health_server is not None:
        await health_server.stop()
    await openai_client.aclose()

    logger.info("Shutdown complete")


def run(argv: list[str] | None = None) -> None:
    """Parse arguments, load the config and run the bot."""
    args = parse_args(argv)

    if args.print_manifest:
        print(yaml.safe_dump(build_app_manifest(), sort_keys=False), end="")
        return

    try:
        config = read_config(args.config)
    except (StartupConfigError, yaml.YAMLError) as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)

    try:
        asyncio.run(main(config))
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
