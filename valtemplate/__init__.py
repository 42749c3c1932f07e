"""Valtemplate - YAML and override driven template renderer.

Builds a single value context from YAML files, ``--set`` overrides and the
process environment, then renders a Jinja2 template against it in strict-key
mode.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
