"""Concrete strategy families."""
