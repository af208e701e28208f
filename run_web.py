#!/usr/bin/env python3
"""
Main entry point for the Matchday web application.

This script launches the Flask-based API server. Tournament files are kept
under MATCHDAY_DATA_DIR (default: ./data).
"""
import os

from matchday.ui.web_app import run_web_app
from matchday.utils.constants import DEFAULT_DATA_DIR, DEFAULT_HOST, DEFAULT_PORT

if __name__ == "__main__":
    run_web_app(
        host=os.environ.get("MATCHDAY_HOST", DEFAULT_HOST),
        port=int(os.environ.get("MATCHDAY_PORT", DEFAULT_PORT)),
        data_dir=os.environ.get("MATCHDAY_DATA_DIR", DEFAULT_DATA_DIR),
    )
