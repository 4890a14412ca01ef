from dataclasses import dataclass


@dataclass(frozen=True)
class Completion:
    """Generated text plus the token usage reported by the provider."""

    text: str
    tokens_used: int = 0
