"""Outbound message splitting."""

DEFAULT_CHUNK_SIZE = 2000

# One UTF-8 character takes at most 4 bytes
MIN_CHUNK_SIZE = 4


def split_message(text: str, limit: int = DEFAULT_CHUNK_SIZE) -> list[str]:
    """Split text into chunks of at most `limit` UTF-8 bytes.

    Chunks never split a multi-byte character, and joining them yields
    the original text.

    Args:
        text: Text to split.
        limit: Maximum encoded size of a chunk in bytes.

    Returns:
        Chunks in order. Empty text yields no chunks.

    Raises:
        ValueError: If `limit` is smaller than one UTF-8 character (4 bytes).
    """
    if limit < MIN_CHUNK_SIZE:
        raise ValueError(f"limit must be at least {MIN_CHUNK_SIZE} bytes")

    data = text.encode("utf-8")
    chunks: list[str] = []
    start = 0
    while start < len(data):
        end = min(start + limit, len(data))
        # Back off continuation bytes (0b10xxxxxx)
        while end < len(data) and data[end] & 0xC0 == 0x80:
            end -= 1
        chunks.append(data[start:end].decode("utf-8"))
        start = end
    return chunks
