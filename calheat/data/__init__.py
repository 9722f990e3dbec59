"""Synthetic return series for demos."""

from .synthetic import add_month_effect, add_weekday_effect, simulate_returns

__all__ = ["add_month_effect", "add_weekday_effect", "simulate_returns"]
