"""Passive AI event generation: viewport admission policy and generation orchestrator."""

__version__ = "0.1.0"
