"""
User interface package for the Matchday tournament engine.

This package contains the Flask web API.
"""
from .web_app import create_app, run_web_app

__all__ = ["create_app", "run_web_app"]
