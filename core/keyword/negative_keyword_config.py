from dataclasses import dataclass

DEFAULT_MIN_CLICKS = 5
DEFAULT_MAX_CONV_RATE = 0.005
DEFAULT_BAD_PHRASES: tuple[str, ...] = (
    "free",
    "job",
    "jobs",
    "hiring",
    "how to",
    "what is",
    "review",
    "reviews",
)


@dataclass(frozen=True)
class NegativeKeywordConfig:
    min_clicks: float = DEFAULT_MIN_CLICKS
    max_conv_rate: float = DEFAULT_MAX_CONV_RATE
    bad_phrases: tuple[str, ...] = DEFAULT_BAD_PHRASES


NEGATIVE_KEYWORD_CONFIG = NegativeKeywordConfig()
