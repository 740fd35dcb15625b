from ledger.config import settings


def format_amount(amount: float | None, currency: str = settings.CURRENCY) -> str:
    """Format an amount for display with no decimals, e.g. 'UGX 1,250,000'."""
    value = amount or 0.0
    sign = "-" if value < 0 else ""
    return f"{sign}{currency} {abs(value):,.0f}"
