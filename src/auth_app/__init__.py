"""Scalekit Auth App - SSO login backend delegating authentication to Scalekit"""

__version__ = "1.0.0"
