"""Least-squares trend fitting."""

from .fitter import TrendFitter

__all__ = ["TrendFitter"]
