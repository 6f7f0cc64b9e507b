"""Utility functions module."""

from .masking import mask_params, mask_secret

__all__ = [
    "mask_params",
    "mask_secret",
]
