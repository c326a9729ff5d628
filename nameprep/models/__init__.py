"""Shared typed models for nameprep."""

from .name_type import NameType

__all__ = ["NameType"]
