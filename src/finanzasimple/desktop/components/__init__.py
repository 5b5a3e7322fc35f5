"""Reusable Flet components."""

from .category_selector import CategorySelector
from .layout import build_app_bar, build_app_view
from .widgets import build_stat_card

__all__ = ["CategorySelector", "build_app_bar", "build_app_view", "build_stat_card"]
