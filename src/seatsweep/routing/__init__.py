"""Routing: a frozen table of exact paths with trailing-slash canonicalisation."""
