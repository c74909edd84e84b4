"""Contracts between the application and infrastructure layers."""

from .protocols import TileRasterizer

__all__ = ["TileRasterizer"]
