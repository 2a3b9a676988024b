"""Token budget estimation.

Token counts are approximated from character length. The estimate can be
above or below the real count; the provider reports the authoritative
usage after each call.
"""

import math

from gptbridge.domain.exceptions import BudgetExceededError

TOKENS_PER_CHARACTER = 1.5
DEFAULT_RESERVE_TOKENS = 16


def estimate_tokens(text: str) -> int:
    """Approximate the token cost of a text.

    Args:
        text: Message content.

    Returns:
        Estimated token count (never negative).
    """
    return math.floor(len(text) * TOKENS_PER_CHARACTER)


def compute_remaining(
    context_window: int,
    running_total: int,
    estimated_new: int,
    reserve: int = DEFAULT_RESERVE_TOKENS,
) -> int:
    """Compute the generation budget left for the next reply.

    Args:
        context_window: Model's maximum input+output tokens.
        running_total: Last total token usage reported by the provider.
        estimated_new: Estimated tokens of the message about to be sent.
        reserve: Minimum budget that must remain for the reply.

    Returns:
        `context_window - (running_total + estimated_new)`.

    Raises:
        BudgetExceededError: If the result is below `reserve`.
        ValueError: If `reserve` is not positive.
    """
    if reserve <= 0:
        raise ValueError("reserve must be positive")
    remaining = context_window - (running_total + estimated_new)
    if remaining < reserve:
        raise BudgetExceededError(remaining=remaining, reserve=reserve)
    return remaining
