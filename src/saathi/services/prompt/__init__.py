"""Prompt construction for the oracle."""
