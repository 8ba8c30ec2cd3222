from collections.abc import Iterable


def is_in_domain(message: str, keywords: Iterable[str]) -> bool:
    """Substring match against the keyword list, case-insensitive.

    Not word-boundary aware: "ai" matches "said". An empty keyword list rejects
    everything.
    """
    lower = message.lower()
    return any(kw.lower() in lower for kw in keywords if kw)
