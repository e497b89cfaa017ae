"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Unit conversion factors and service defaults
- exceptions: Custom exception hierarchy
"""
