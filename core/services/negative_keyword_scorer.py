from collections.abc import Iterable, Sequence
from typing import Optional

from structlog import get_logger

from core.keyword.negative_keyword_config import (
    NEGATIVE_KEYWORD_CONFIG,
    NegativeKeywordConfig,
)
from core.models.search_terms import NEGATIVE_MATCH_TYPES, Candidate, Row
from utils.helpers import format_number, micros_to_currency

logger = get_logger(__name__)


def conversion_rate(row: Row) -> float:
    """Conversions per click; 0 when the row has no clicks."""
    if row.clicks == 0:
        return 0.0
    return row.conversions / row.clicks


def _low_conversion_reason(row: Row, config: NegativeKeywordConfig) -> Optional[str]:
    rate = conversion_rate(row)
    if row.clicks < config.min_clicks or rate > config.max_conv_rate:
        return None
    cost = micros_to_currency(row.cost_micros)
    return (
        f"Low conv-rate ({rate * 100:.2f}%) on {row.clicks} clicks; "
        f"cost ~${cost:.2f}"
    )


def _bad_phrase_reason(row: Row, phrases: Sequence[str]) -> Optional[str]:
    term = row.search_term.lower()
    matched = next((phrase for phrase in phrases if phrase in term), None)
    if matched is None:
        return None
    return f'Search term contains phrase "{matched}".'


def score_row(
    row: Row,
    config: NegativeKeywordConfig = NEGATIVE_KEYWORD_CONFIG,
) -> Optional[Candidate]:
    phrases = [phrase.lower() for phrase in config.bad_phrases]
    reasons = [
        reason
        for reason in (
            _low_conversion_reason(row, config),
            _bad_phrase_reason(row, phrases),
        )
        if reason
    ]
    if not reasons:
        return None
    return Candidate(
        text=row.search_term,
        match_types=list(NEGATIVE_MATCH_TYPES),
        reasons=reasons,
    )


def build_summary(
    candidate_count: int, row_count: int, config: NegativeKeywordConfig
) -> str:
    noun = "candidate" if candidate_count == 1 else "candidates"
    return (
        f"Identified {candidate_count} negative keyword {noun} from {row_count} rows "
        f"(minClicks={format_number(config.min_clicks)}, "
        f"maxConvRate={config.max_conv_rate * 100:.2f}%)."
    )


def suggest_negative_keywords(
    rows: Iterable[Row],
    config: NegativeKeywordConfig = NEGATIVE_KEYWORD_CONFIG,
) -> tuple[str, list[Candidate]]:
    """Score rows against the low conversion rate and bad phrase heuristics.

    Returns the summary line and one Candidate per row that triggered at
    least one heuristic, in input order. Pure: no I/O, no shared state.
    """
    rows = list(rows)

    candidates = []
    for row in rows:
        candidate = score_row(row, config)
        if candidate is not None:
            candidates.append(candidate)

    summary = build_summary(len(candidates), len(rows), config)
    logger.debug(
        "Negative keywords scored",
        rows=len(rows),
        candidates=len(candidates),
    )
    return summary, candidates
