"""
Formatting utilities.
"""

from datetime import date


def format_currency(amount: int, currency: str = "USD") -> str:
    """
    Format an integer amount as currency.

    Args:
        amount: The amount in whole units (e.g., dollars, not cents).
        currency: Currency code (default USD).

    Returns:
        Formatted currency string.
    """
    symbols = {
        "USD": "$",
        "CAD": "CA$",
    }
    symbol = symbols.get(currency, currency + " ")
    return f"{symbol}{amount:,}"


def format_percent(value: float, decimals: int = 1) -> str:
    """
    Format a number as a percentage.

    Args:
        value: The percentage value.
        decimals: Number of decimal places.

    Returns:
        Formatted percentage string.
    """
    return f"{value:.{decimals}f}%"


def format_ratio(ratio: float, decimals: int = 0) -> str:
    """Format a 0-1 ratio as a percentage, e.g. 0.274 -> '27%'."""
    return format_percent(ratio * 100, decimals)


def format_date(value: date) -> str:
    """Format a date for narrative text, e.g. 'Oct 01, 2025'."""
    return value.strftime("%b %d, %Y")


def format_days(days: int) -> str:
    """Signed day count as text: 'in 3 days', 'today', '2 days ago'."""
    if days == 0:
        return "today"
    unit = "day" if abs(days) == 1 else "days"
    if days > 0:
        return f"in {days} {unit}"
    return f"{-days} {unit} ago"
