"""Display formatting for projection figures.

Presentation only: nothing here is fed back into a calculation.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Dict, Tuple

# short UI locale -> full locale tag
LOCALE_ALIASES: Dict[str, str] = {
    "ja": "ja-JP",
    "en": "en-US",
    "zh-TW": "zh-TW",
}

_DEFAULT_SYMBOLS: Dict[str, str] = {
    "JPY": "¥",
    "USD": "$",
    "TWD": "NT$",
}

_LOCAL_SYMBOLS: Dict[Tuple[str, str], str] = {
    ("ja-JP", "JPY"): "￥",
    ("zh-TW", "TWD"): "$",
}


def normalize_locale(locale: str) -> str:
    return LOCALE_ALIASES.get(locale, locale)


def currency_symbol(locale: str, currency: str) -> str:
    locale = normalize_locale(locale)
    currency = currency.upper()
    return _LOCAL_SYMBOLS.get((locale, currency), _DEFAULT_SYMBOLS.get(currency, f"{currency} "))


def format_currency(value: float, locale: str = "ja-JP", currency: str = "JPY") -> str:
    """Whole currency units, comma grouped, e.g. ``￥1,628,895``.

    Halves round away from zero. Non-finite values render as ``∞`` or ``NaN``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return f"{'-' if value < 0 else ''}{currency_symbol(locale, currency)}∞"

    amount = Decimal(str(value))
    with localcontext() as ctx:
        # room for every integer digit of very large totals
        ctx.prec = max(ctx.prec, amount.adjusted() + 2)
        rounded = amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        sign = "-" if rounded < 0 else ""
        return f"{sign}{currency_symbol(locale, currency)}{abs(rounded):,.0f}"


def format_percentage(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"


def format_period_label(year: float) -> str:
    """Label a breakdown period: ``Start``, ``6 months``, ``Year 3`` or ``2 years 6 months``."""
    if year == 0:
        return "Start"
    if year < 1:
        return f"{round(year * 12)} months"
    if float(year).is_integer():
        return f"Year {int(year)}"

    whole_years = math.floor(year)
    months = round((year - whole_years) * 12)
    if months == 0:
        return f"Year {whole_years}"
    if months == 12:
        return f"Year {whole_years + 1}"
    return f"{whole_years} years {months} months"


def validate_number(value: float, minimum: float, maximum: float) -> bool:
    return not math.isnan(value) and minimum <= value <= maximum
