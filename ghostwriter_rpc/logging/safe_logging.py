"""Safe logging helpers that avoid leaking credential material."""


def token_presence(label: str, token: str | None) -> str:
    """Describe whether a token was present without logging its value."""
    return f"{label}={'present' if token else 'absent'}"
