from core.models.search_terms import Row

# Fixed sample used whenever live Google Ads data is unavailable.
MOCK_ROWS: tuple[Row, ...] = (
    Row(
        search_term="free resume template",
        date="2024-05-01",
        campaign_id="1234567890",
        ad_group_id="1111111111",
        impressions=120,
        clicks=25,
        cost_micros=1_750_000,
        conversions=0,
    ),
    Row(
        search_term="how to write a resume",
        date="2024-05-02",
        campaign_id="1234567890",
        ad_group_id="1111111111",
        impressions=95,
        clicks=18,
        cost_micros=2_400_000,
        conversions=1,
    ),
    Row(
        search_term="executive recruiting services",
        date="2024-05-02",
        campaign_id="1234567890",
        ad_group_id="2222222222",
        impressions=60,
        clicks=7,
        cost_micros=3_300_000,
        conversions=3,
    ),
    Row(
        search_term="job board for developers",
        date="2024-05-03",
        campaign_id="1234567890",
        ad_group_id="2222222222",
        impressions=210,
        clicks=35,
        cost_micros=4_150_000,
        conversions=0,
    ),
    Row(
        search_term="resume review service",
        date="2024-05-03",
        campaign_id="1234567890",
        ad_group_id="3333333333",
        impressions=44,
        clicks=4,
        cost_micros=950_000,
        conversions=0,
    ),
)


def mock_rows() -> list[Row]:
    return list(MOCK_ROWS)
