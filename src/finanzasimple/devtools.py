"""Dev-mode diagnostics printed next to the structured log."""

from __future__ import annotations

import traceback
from typing import Any, Mapping

from .config import BaseConfig

_MASKED = {"token", "password"}


def in_dev_mode(config: BaseConfig | None) -> bool:
    return bool(getattr(config, "DEV_MODE", False)) if config is not None else False


def _render_context(context: Mapping[str, Any]) -> str:
    return " ".join(
        f"{key}={'***' if key in _MASKED else value}" for key, value in context.items()
    )


def dev_log(
    config: BaseConfig | None,
    message: str,
    *,
    exc: Exception | None = None,
    context: Mapping[str, Any] | None = None,
) -> None:
    """Print a ``[DEV]`` line (and traceback) when dev mode is on.

    Credentials in ``context`` are masked.
    """

    if not in_dev_mode(config):
        return

    line = f"[DEV] {message}"
    if context:
        line = f"{line} ({_render_context(context)})"
    print(line)
    if exc is not None:
        traceback.print_exception(exc)
