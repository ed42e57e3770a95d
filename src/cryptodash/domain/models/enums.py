"""Enumerations for domain models."""

from enum import Enum


class AlertCondition(str, Enum):
    """Conditions an alert setting can watch for."""

    PRICE_ABOVE = "PRICE_ABOVE"
    PRICE_BELOW = "PRICE_BELOW"
    CHANGE_24H_ABOVE = "CHANGE_24H_ABOVE"  # absolute 24h % move
