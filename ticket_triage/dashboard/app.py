"""
Dashboard launcher.

Utility functions for locating the Streamlit page and building the command
and environment the server is started with.
"""

import os
import sys
from pathlib import Path

from ..core.config import DASHBOARD_PORT


def get_dashboard_path() -> Path:
    """Get the path to the main streamlit app file."""
    return Path(__file__).parent / "streamlit_app.py"


def build_streamlit_command(port: int = DASHBOARD_PORT, headless: bool = True) -> list:
    """Command line that serves the dashboard with the dark theme."""
    return [
        sys.executable, "-m", "streamlit", "run",
        str(get_dashboard_path()),
        "--server.port", str(port),
        "--server.headless", "true" if headless else "false",
        "--browser.gatherUsageStats", "false",
        "--theme.base", "dark",
        "--theme.primaryColor", "#0066CC",
    ]


def dashboard_env(source: str = None) -> dict:
    """
    Environment for the Streamlit subprocess.

    Args:
        source: Ticket source URL or path (optional, overrides TICKETS_SOURCE)
    """
    env = os.environ.copy()
    if source:
        env["TICKETS_SOURCE"] = str(source)
    return env
