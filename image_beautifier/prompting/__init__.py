"""Prompt composition package (icon themes, hero banner phrasing)."""
