"""Matplotlib rendering helpers for group TEP plots."""

from .line import plot_group_average

__all__ = ["plot_group_average"]
