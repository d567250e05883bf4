"""
Saathi Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of classifier thresholds
- Secure handling of oracle credentials
"""

from saathi.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
