"""Tiered quantity pricing tables for product pages."""

__version__ = "0.1.0"
