"""Engine settings — env vars and code defaults in one frozen object.

Priority chain (highest to lowest):
  1. Init kwargs   — values passed to :class:`ShapecheckSettings` directly
  2. Env vars      — ``SHAPECHECK_*`` prefix
  3. Code defaults — baked into the model below

Uses Pydantic Settings v2. :func:`get_settings` caches one instance per
process; :func:`reset_settings` drops it so tests can change env vars.
"""

from __future__ import annotations

import functools

from pydantic_settings import BaseSettings


class ShapecheckSettings(BaseSettings):
    """Settings consumed by the output and logging layers.

    Attributes:
        issue_separator: Joins ``path: message`` pairs in a summary string.
        path_separator: Joins path segments (``address.lines.0``).
        root_label: Stands in for the empty path of root-level issues.
        verbose: Enable DEBUG-level engine logs.
        log_json: Render logs as JSON lines instead of console text.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SHAPECHECK_",
    }

    issue_separator: str = "; "
    path_separator: str = "."
    root_label: str = "(root)"
    verbose: bool = False
    log_json: bool = False


@functools.cache
def get_settings() -> ShapecheckSettings:
    """Return the process-wide settings, built on first use."""
    return ShapecheckSettings()


def reset_settings() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
