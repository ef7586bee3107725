"""
Configuration module.

Immutable defaults, YAML instrument overrides and parameter validation.
"""
