from typing import Optional

SEARCH_TERM_FIELDS = (
    "search_term_view.search_term",
    "segments.date",
    "campaign.id",
    "ad_group.id",
    "metrics.impressions",
    "metrics.clicks",
    "metrics.cost_micros",
    "metrics.conversions",
)


def build_search_term_query(
    start: str,
    end: str,
    campaign_id: Optional[str] = None,
    ad_group_id: Optional[str] = None,
) -> str:
    """GAQL for search term performance between start and end (inclusive).

    Only ENABLED campaigns are included. Campaign and ad group filters are
    appended only when given.
    """
    conditions = [
        f"segments.date BETWEEN '{start}' AND '{end}'",
        "campaign.status = 'ENABLED'",
    ]
    if campaign_id:
        conditions.append(f"campaign.id = '{campaign_id}'")
    if ad_group_id:
        conditions.append(f"ad_group.id = '{ad_group_id}'")

    select_clause = ",\n".join(f"  {field}" for field in SEARCH_TERM_FIELDS)
    where_clause = "\n  AND ".join(conditions)
    return (
        f"SELECT\n{select_clause}\n"
        f"FROM search_term_view\n"
        f"WHERE {where_clause}"
    )
