from __future__ import annotations

from estimator.domain.entities.price_range import PriceRange


CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "AUD": "A$", "CAD": "C$"}


def format_currency(amount: float, currency: str = "USD") -> str:
    """$1,297 style; cents only when the amount has them."""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    if float(amount).is_integer():
        return f"{sign}{symbol}{int(amount):,}"
    return f"{sign}{symbol}{amount:,.2f}"


def format_range(price_range: PriceRange, currency: str = "USD") -> str:
    if price_range.min == price_range.max:
        return format_currency(price_range.max, currency)
    return f"{format_currency(price_range.min, currency)} - {format_currency(price_range.max, currency)}"
