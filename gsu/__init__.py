"""Helpers for game scripting hosts.

Collection and weighted-sampling helpers live in ``gsu.algo``, the repeating,
debounced and throttled call wrappers in ``gsu.timing``, and session start-time
bookkeeping in ``gsu.session``.
"""

from importlib.metadata import version

__all__ = ["__version__"]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return version("game-script-utils")
        except Exception:  # pragma: no cover - fallback when pkg metadata missing
            return "0.1.0"
    raise AttributeError(name)
