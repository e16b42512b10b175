"""Adapters for the forum, local storage and authentication signals."""
