"""
Core utilities shared across the citizen services API.

This package hosts configuration, the error taxonomy, logging setup, rate
limiting and small helpers (timestamps, text normalisation).
"""
