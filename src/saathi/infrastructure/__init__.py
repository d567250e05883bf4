"""
Saathi Infrastructure Layer

Oracle providers and metrics.
"""
