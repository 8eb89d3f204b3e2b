"""Feast Serving configuration core.

This package contains the configuration model for the serving process:
- models: store, tracing and typed connection models
- stores: store type registry and built-in decoders
- properties: serving configuration aggregate, validation and loading
- config: process settings read from the environment
- observability: structured logging
"""

__version__ = "0.1.0"
