from typing import Optional

MICROS_PER_UNIT = 1_000_000


def micros_to_currency(micros: Optional[float]) -> float:
    """Google Ads cost micros to currency units; None counts as zero."""
    return (micros or 0) / MICROS_PER_UNIT


def format_number(value: float) -> str:
    """Render whole numbers without a trailing .0 (5.0 -> '5', 2.5 -> '2.5')."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def normalize_customer_id(customer_id: str) -> str:
    return customer_id.replace("-", "").strip()
