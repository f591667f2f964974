"""Field Ops activity engine: drives template-based activities at managed homes."""

__version__ = '0.1.0'
