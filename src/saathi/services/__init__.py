"""
Saathi Services Layer

Lexical classification, oracle consultation and prompt building.
"""
