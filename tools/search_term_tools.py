from pydantic import ValidationError
from structlog import get_logger

from adapters.google.search_term import GoogleSearchTermAdapter
from core.keyword.negative_keyword_config import NegativeKeywordConfig
from core.models.search_terms import (
    FetchSearchTermsInput,
    FetchSearchTermsOutput,
    SuggestNegativeKeywordsInput,
    SuggestNegativeKeywordsOutput,
)
from core.services.negative_keyword_scorer import suggest_negative_keywords
from core.services.query_builder import build_search_term_query
from tools.tool_schemas import model_to_mcp_tool

logger = get_logger(__name__)

FETCH_SEARCH_TERMS = "fetch_search_terms"
SUGGEST_NEGATIVE_KEYWORDS = "suggest_negative_keywords"

TOOLS = [
    model_to_mcp_tool(
        FETCH_SEARCH_TERMS,
        "Fetch Google Ads search term performance rows (mocked when credentials are missing).",
        FetchSearchTermsInput,
        FetchSearchTermsOutput,
    ),
    model_to_mcp_tool(
        SUGGEST_NEGATIVE_KEYWORDS,
        "Suggest negative keyword candidates from Google Ads search term rows.",
        SuggestNegativeKeywordsInput,
        SuggestNegativeKeywordsOutput,
    ),
]


def _parse(model, tool_name: str, arguments: dict):
    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        logger.warning("Tool input validation failed", tool=tool_name, errors=e.errors())
        raise


class SearchTermTools:
    def __init__(self, adapter: GoogleSearchTermAdapter):
        self.adapter = adapter

    async def call(self, name: str, arguments: dict) -> dict:
        handlers = {
            FETCH_SEARCH_TERMS: self.fetch_search_terms,
            SUGGEST_NEGATIVE_KEYWORDS: self.suggest_negative_keywords,
        }
        handler = handlers.get(name)
        if handler is None:
            raise ValueError(f"Unknown tool: {name}")
        return await handler(arguments)

    async def fetch_search_terms(self, arguments: dict) -> dict:
        params = _parse(FetchSearchTermsInput, FETCH_SEARCH_TERMS, arguments)
        query = build_search_term_query(
            start=params.start,
            end=params.end,
            campaign_id=params.campaign_id,
            ad_group_id=params.ad_group_id,
        )
        rows = await self.adapter.resolve_rows(query, params.customer_id)
        return FetchSearchTermsOutput(rows=rows).model_dump(mode="json", by_alias=True)

    async def suggest_negative_keywords(self, arguments: dict) -> dict:
        params = _parse(SuggestNegativeKeywordsInput, SUGGEST_NEGATIVE_KEYWORDS, arguments)
        config = NegativeKeywordConfig(
            min_clicks=params.min_clicks,
            max_conv_rate=params.max_conv_rate,
            bad_phrases=tuple(params.bad_phrases),
        )
        summary, candidates = suggest_negative_keywords(params.rows, config)
        return SuggestNegativeKeywordsOutput(
            summary=summary, candidates=candidates
        ).model_dump(mode="json")
