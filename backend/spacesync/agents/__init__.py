"""Suggestion providers."""
