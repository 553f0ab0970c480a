"""
Global configuration for AAPC.

This module contains environment-specific settings that apply across the codec
tooling. The codec itself has no configuration: its format is fixed.
"""

import os

_SUPPORTED_AAPC_ENVS: list[str] = ["prod", "test"]

AAPC_ENV = os.environ.get("AAPC_ENV", "prod").lower()
"""The environment flag ('prod' or 'test'). Defaults to 'prod'."""

if AAPC_ENV not in _SUPPORTED_AAPC_ENVS:
    raise ValueError(
        f"Invalid AAPC_ENV environment variable: '{AAPC_ENV}'. "
        f"Supported values: {_SUPPORTED_AAPC_ENVS}"
    )
