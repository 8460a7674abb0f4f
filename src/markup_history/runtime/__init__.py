"""Process-level services shared by the history core."""

from . import telemetry

__all__ = ["telemetry"]
