"""Pieces shared by UI implementations."""

from .adapter import UIAdapter

__all__ = ["UIAdapter"]
