"""Helpers shared by the services and the CLI."""

from .text import parse_price, reformat_ws

__all__ = ["parse_price", "reformat_ws"]
