"""Registry of running conversation sessions."""

import asyncio
import logging

from gptbridge.application.use_cases.conversation_session import ConversationSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Runs sessions as background tasks, at most one per thread.

    Sessions are kept in process memory only.
    """

    def __init__(self) -> None:
        """Initialize the registry."""
        self._sessions: dict[str, ConversationSession] = {}
        self._tasks: dict[str, asyncio.Task[None]] = {}

    def start(self, session: ConversationSession) -> asyncio.Task[None]:
        """Run a session in a background task.

        Args:
            session: A session that has not been started.

        Returns:
            The task running the session.

        Raises:
            ValueError: If a session is already running for the thread.
        """
        key = session.thread_id
        if self.get(key) is not None:
            raise ValueError(f"A session is already running for thread {key}")

        self._sessions[key] = session
        task = asyncio.create_task(self._run(session), name=f"session-{key}")
        self._tasks[key] = task
        logger.info("Started session %s (%d active)", key, len(self._sessions))
        return task

    async def _run(self, session: ConversationSession) -> None:
        key = session.thread_id
        try:
            await session.run()
        except asyncio.CancelledError:
            logger.info("Session %s cancelled", key)
            raise
        except Exception:
            logger.exception("Session %s ended with an unexpected error", key)
        finally:
            self._sessions.pop(key, None)
            self._tasks.pop(key, None)

    def get(self, thread_key: str) -> ConversationSession | None:
        """Find the running session of a thread."""
        return self._sessions.get(thread_key)

    @property
    def active_count(self) -> int:
        return len(self._sessions)

    async def shutdown(self, timeout: float = 5.0) -> None:
        """Cancel all running sessions and wait for them to finish.

        Args:
            timeout: Maximum seconds to wait.
        """
        tasks = list(self._tasks.values())
        if not tasks:
            return

        logger.info("Cancelling %d session(s)", len(tasks))
        for task in tasks:
            task.cancel()
        done, pending = await asyncio.wait(tasks, timeout=timeout)
        if pending:
            logger.warning("%d session(s) did not stop in time", len(pending))
