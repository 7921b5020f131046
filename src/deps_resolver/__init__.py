"""The `deps-resolver` APIs."""

__version__ = "0.1.0"

from .dependencies import *  # noqa: F403
