"""Build date recorded when the package is built."""

from __future__ import annotations

__all__ = ["BUILD_TIME", "get_build_date_time"]

# Overwritten by the build to record when the package was built.
BUILD_TIME = ""


def get_build_date_time() -> str:
    """Return the recorded build date, or an empty string if none was set."""
    return BUILD_TIME