import datetime
from typing import Annotated, List, Literal, Optional, Tuple, get_args

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from core.keyword.negative_keyword_config import (
    DEFAULT_BAD_PHRASES,
    DEFAULT_MAX_CONV_RATE,
    DEFAULT_MIN_CLICKS,
)

# Wire contract for both MCP tools. Field names are camelCase on the wire
# (searchTerm, costMicros, ...) except Candidate.match_types.

NegativeMatchType = Literal["EXACT", "PHRASE"]
NEGATIVE_MATCH_TYPES: Tuple[str, ...] = get_args(NegativeMatchType)

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _check_calendar_date(value: str) -> str:
    datetime.date.fromisoformat(value)
    return value


IsoDate = Annotated[
    str,
    Field(pattern=ISO_DATE_PATTERN, description="Calendar date, YYYY-MM-DD"),
    AfterValidator(_check_calendar_date),
]

BadPhrase = Annotated[str, Field(min_length=1)]


class Row(BaseModel):
    """One performance observation for a search term on a date."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    search_term: str
    date: IsoDate
    campaign_id: Optional[str] = None
    ad_group_id: Optional[str] = None
    impressions: int = Field(..., ge=0)
    clicks: int = Field(..., ge=0)
    cost_micros: Optional[int] = Field(None, ge=0)
    conversions: float = Field(..., ge=0)


class Candidate(BaseModel):
    """Negative keyword recommendation derived from one Row."""

    text: str
    match_types: List[NegativeMatchType] = Field(
        default_factory=lambda: list(NEGATIVE_MATCH_TYPES)
    )
    reasons: List[str] = Field(..., min_length=1)


class FetchSearchTermsInput(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    customer_id: str = Field(..., min_length=1, description="Google Ads customer id")
    start: IsoDate
    end: IsoDate
    campaign_id: Optional[str] = None
    ad_group_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_range(self) -> "FetchSearchTermsInput":
        # ISO dates order lexically
        if self.start > self.end:
            raise ValueError("start must be on or before end")
        return self


class FetchSearchTermsOutput(BaseModel):
    rows: List[Row]


class SuggestNegativeKeywordsInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rows: List[Row]
    min_clicks: float = Field(DEFAULT_MIN_CLICKS, ge=0)
    max_conv_rate: float = Field(DEFAULT_MAX_CONV_RATE, ge=0)
    bad_phrases: List[BadPhrase] = Field(
        default_factory=lambda: list(DEFAULT_BAD_PHRASES)
    )


class SuggestNegativeKeywordsOutput(BaseModel):
    summary: str
    candidates: List[Candidate]
