"""Jinja2 environment for the dashboard pages."""

from decimal import Decimal
from pathlib import Path
from typing import Optional

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def format_money(value: Optional[Decimal]) -> str:
    if value is None:
        return "n/a"
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_price(value: Optional[Decimal]) -> str:
    """Prices under one unit keep more precision (stablecoins, small caps)."""
    if value is None:
        return "n/a"
    if abs(value) >= 1:
        return f"${value:,.2f}"
    return f"${value:,.6f}"


def format_pct(value: Optional[Decimal]) -> str:
    if value is None:
        return "n/a"
    return f"{value:+.2f}%"


def format_quantity(value: Optional[Decimal]) -> str:
    if value is None:
        return ""
    text = f"{value:f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


def format_large(value: Optional[Decimal]) -> str:
    """Compact market cap, e.g. $1.27T."""
    if value is None:
        return "n/a"
    for divisor, suffix in ((Decimal("1e12"), "T"), (Decimal("1e9"), "B"), (Decimal("1e6"), "M")):
        if abs(value) >= divisor:
            return f"${value / divisor:,.2f}{suffix}"
    return format_money(value)


templates.env.filters["money"] = format_money
templates.env.filters["price"] = format_price
templates.env.filters["pct"] = format_pct
templates.env.filters["qty"] = format_quantity
templates.env.filters["large"] = format_large
