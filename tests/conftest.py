"""Pytest configuration and shared fixtures."""

import os

from hypothesis import settings

if "AAPC_ENV" not in os.environ:
    os.environ["AAPC_ENV"] = "test"

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")
