def chunk_text(text: str, max_chars: int) -> list[str]:
    """Split text into contiguous slices of at most max_chars characters.

    Slicing is by code point, so multi-byte characters are never split.
    Joining the result reproduces the input; an empty input gives no chunks.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")
    return [text[start:start + max_chars] for start in range(0, len(text), max_chars)]
