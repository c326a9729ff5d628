"""Telemetry scaffolds for deterministic run logging."""

from .logger import RunLogger

__all__ = ["RunLogger"]
