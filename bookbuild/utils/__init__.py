"""
Shared utilities for bookbuild.

Common functionality used across contexts:
- Logger setup
- Build configuration
- Timestamps
"""

from bookbuild.utils.config import BuildConfig, load_build_config
from bookbuild.utils.timestamp import now

__all__ = ["BuildConfig", "load_build_config", "now"]
