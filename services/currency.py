"""Currency codes offered in the forms and their display symbols."""

from decimal import Decimal

CURRENCIES = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "CNY": "¥",
    "AUD": "A$",
    "CAD": "C$",
    "CHF": "CHF ",
    "SGD": "S$",
    "AED": "AED ",
    "ZAR": "R",
}


def currency_symbol(code: str | None) -> str:
    if not code:
        return "$"
    return CURRENCIES.get(code.upper(), f"{code.upper()} ")


def format_money(value, code: str | None) -> str:
    return f"{currency_symbol(code)}{Decimal(value):.2f}"
