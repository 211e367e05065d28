"""Jiangsu warm-disease diffusion map."""

__version__ = "0.1.0"
