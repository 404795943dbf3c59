#!/usr/bin/env python3
"""
Ticket Triage - Main CLI Entry Point
====================================

This script is the single command-line entry point for the support ticket
dashboard.  It runs in one of three modes:

DASHBOARD  (default, or --dashboard-only)
    Spawns a Streamlit subprocess serving ticket_triage/dashboard/streamlit_app.py.
    The ticket source given with --file is passed to the dashboard through the
    TICKETS_SOURCE environment variable.  The default mode first prints the
    per-category counts to the console; --dashboard-only skips that step.

HEADLESS  (--no-gui)
    Loads the tickets, classifies them, prints the per-category counts and,
    with --export, writes the filtered list to a CSV file.  The filters
    (--category, --escalate-only, --query) are the same as the dashboard's.

HEALTH CHECK  (--health-check)
    Verifies the Python version, the required packages and that the ticket
    source can be loaded, then exits.

Usage:
    python run.py                                   # Launch dashboard
    python run.py --file tickets.json               # Dashboard on another source
    python run.py --no-gui                          # Print category counts
    python run.py --no-gui --escalate-only --export escalated.csv
    python run.py --health-check
"""

import logging
import sys
import os
import re
import subprocess
import argparse
import webbrowser
from pathlib import Path
import time
import atexit
import socket

from ticket_triage.core.config import ALL_CATEGORIES, DASHBOARD_PORT, TICKETS_SOURCE
from ticket_triage.dashboard import build_streamlit_command, dashboard_env, get_dashboard_path
from ticket_triage.models.data_models import FilterConfig
from ticket_triage.pipeline import TicketPipeline, load_tickets
from ticket_triage.reports import write_csv

# ==========================================
# PATH VALIDATION & SECURITY
# ==========================================
# Every user-supplied path is resolved to an absolute path and checked
# against an allowlist of directories (the current working directory and
# the home directory) before being used.

def validate_file_path(path: str, must_exist: bool = False) -> Path:
    """
    Validate and sanitize a file path to prevent path traversal attacks.

    Args:
        path: Raw file path string from user input or CLI argument.
        must_exist: When True, raise ValueError if the resolved path does not
                    exist on disk.

    Returns:
        A fully-resolved Path object within the allowed directories.

    Raises:
        ValueError: If the path is malformed, outside allowed directories,
                    or does not exist when must_exist is True.
    """
    try:
        resolved = Path(path).resolve()

        if must_exist and not resolved.exists():
            raise ValueError(f"File not found: {path}")

        work_dir = Path.cwd().resolve()
        home_dir = Path.home().resolve()

        allowed = (
            resolved.is_relative_to(work_dir) or
            resolved.is_relative_to(home_dir)
        )

        if not allowed:
            raise ValueError(f"Path outside allowed directories: {path}")

        return resolved

    except Exception as e:
        raise ValueError(f"Invalid file path '{path}': {e}")


def sanitize_filename(filename: str) -> str:
    """
    Strip dangerous characters from a filename to make it filesystem-safe.

    Args:
        filename: Original filename string (may contain path separators or
                  special characters).

    Returns:
        A filename containing only alphanumeric characters, spaces, hyphens,
        underscores, and dots, truncated to 255 chars.
    """
    filename = os.path.basename(filename)
    filename = re.sub(r'[^\w\s\-\.]', '', filename)
    return filename[:255]


# ==========================================
# LOGGING
# ==========================================
# Dual-output logging: a DEBUG-level log file per run under ./logs and a
# quieter console handler (WARNING by default, INFO with --verbose).

def setup_logging(verbose: bool = False):
    """
    Configure the root logger with file and console handlers.

    Args:
        verbose: When True, lower the console handler to INFO level.

    Returns:
        Path: Absolute path to the newly created log file.
    """
    log_dir = Path.cwd() / "logs"
    log_dir.mkdir(exist_ok=True)

    timestamp = time.strftime('%Y%m%d_%H%M%S')
    log_file = log_dir / f"ticket_triage_{timestamp}.log"

    file_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Replace handlers from an earlier call in the same process.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    if verbose:
        print(f"\U0001f4dd Verbose logging enabled. Log file: {log_file}")

    return log_file


logger = logging.getLogger(__name__)


# ==========================================
# HEALTH CHECK UTILITIES
# ==========================================

def check_required_packages():
    """
    Verify that core Python packages are importable.

    Returns:
        Tuple of (all_installed: bool, missing_packages: list[str]).
        missing_packages contains pip install names, not import names.
    """
    # Mapping: Python import name -> pip install name
    required = {
        'streamlit': 'streamlit',
        'streamlit_js_eval': 'streamlit-js-eval',
        'plotly': 'plotly',
        'pandas': 'pandas',
        'requests': 'requests',
        'tqdm': 'tqdm',
    }

    missing = []
    for import_name, package_name in required.items():
        try:
            __import__(import_name)
        except ImportError:
            missing.append(package_name)

    return len(missing) == 0, missing


def check_ticket_source(source=None):
    """
    Check that the ticket source yields at least one ticket.

    Returns:
        Tuple of (ok: bool, ticket_count: int).
    """
    tickets = load_tickets(source)
    return len(tickets) > 0, len(tickets)


def health_check(source=None):
    """
    Run a diagnostic check and print a human-readable report.

    Returns:
        bool: True if every check passed.
    """
    print()
    print("=" * 60)
    print("  \U0001f3e5 TICKET TRIAGE - HEALTH CHECK")
    print("=" * 60)
    print()

    python_version = sys.version_info
    python_ok = python_version >= (3, 9)
    status = "✅" if python_ok else "❌"
    print(f"{status} Python Version: {python_version.major}.{python_version.minor}.{python_version.micro}")
    if not python_ok:
        print("   Required: Python 3.9+")

    packages_ok, missing = check_required_packages()
    status = "✅" if packages_ok else "❌"
    print(f"{status} Required Packages: {'All installed' if packages_ok else f'{len(missing)} missing'}")
    if missing:
        print(f"   Missing: {', '.join(missing)}")
        print(f"   Install with: pip install {' '.join(missing)}")

    source_ok, count = check_ticket_source(source)
    status = "✅" if source_ok else "❌"
    print(f"{status} Ticket Source: {source or TICKETS_SOURCE} ({count} tickets)")

    dashboard_ok = get_dashboard_path().exists()
    status = "✅" if dashboard_ok else "❌"
    print(f"{status} Dashboard Script: {'Found' if dashboard_ok else 'Missing'}")

    print()
    print("=" * 60)

    all_ok = python_ok and packages_ok and source_ok and dashboard_ok
    if all_ok:
        print("  ✅ All checks passed!")
    else:
        print("  ❌ Some checks failed. Please fix the issues above.")
    print("=" * 60)
    print()

    return all_ok


def parse_args(argv=None):
    """
    Parse and return command-line arguments.

    Returns:
        argparse.Namespace with the parsed flags.
    """
    parser = argparse.ArgumentParser(
        description='Ticket Triage - Support Tickets Dashboard',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py                          Launch dashboard
  python run.py --file tickets.json      Launch dashboard on a specific source
  python run.py --no-gui                 Print category counts only
  python run.py --no-gui --export out.csv --escalate-only
  python run.py --port 8502              Use custom port for dashboard
        """
    )

    # Data source
    parser.add_argument(
        '--file', '-f',
        type=str,
        help='Ticket JSON file or URL (default: TICKETS_SOURCE)'
    )

    parser.add_argument(
        '--export', '-o',
        type=str,
        help='Write the filtered tickets to this CSV file (with --no-gui)'
    )

    # Filters for headless mode
    parser.add_argument(
        '--category',
        type=str,
        default=ALL_CATEGORIES,
        help=f'Only tickets in this category (default: {ALL_CATEGORIES})'
    )

    parser.add_argument(
        '--escalate-only',
        action='store_true',
        help='Only tickets whose category escalates to engineering'
    )

    parser.add_argument(
        '--query', '-q',
        type=str,
        default='',
        help='Case-insensitive search in summary, requester name and subject'
    )

    # Execution mode flags
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '--no-gui',
        action='store_true',
        help='Classify and export without launching the dashboard'
    )

    mode.add_argument(
        '--dashboard-only',
        action='store_true',
        help='Launch the dashboard without the console category summary'
    )

    # Dashboard configuration
    parser.add_argument(
        '--port',
        type=int,
        default=DASHBOARD_PORT,
        help=f'Port for Streamlit dashboard (default: {DASHBOARD_PORT})'
    )

    parser.add_argument(
        '--no-browser',
        action='store_true',
        help='Do not automatically open browser'
    )

    # Debugging / diagnostics
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed logging output'
    )

    parser.add_argument(
        '--health-check',
        action='store_true',
        help='Run system health check and exit'
    )

    return parser.parse_args(argv)


def print_category_summary(data):
    """Print the headline numbers and per-category counts of a DashboardData."""
    print()
    print(f"  Total: {data.total}  |  To escalate: {data.escalate_count}")
    print("-" * 60)
    for category in data.categories[1:]:
        print(f"  {category:<32} {data.counts[category]:>5}")
    print("-" * 60)


def run_headless(source=None, export=None, config=None):
    """
    Load, classify and optionally export tickets without the dashboard.

    Args:
        source: Ticket source URL or path (default TICKETS_SOURCE).
        export: CSV output path, or None to only print counts.
        config: FilterConfig applied before exporting.

    Returns:
        bool: True if at least one ticket was loaded.
    """
    pipeline = TicketPipeline(source, show_progress=True)
    pipeline.load()
    data = pipeline.run()

    if data.is_empty:
        print("⚠️ No tickets loaded.")
        return False

    print_category_summary(data)

    visible = pipeline.filter(config)
    if export:
        export_path = validate_file_path(export)
        export_path = export_path.with_name(sanitize_filename(export_path.name))
        write_csv(visible, export_path)
        print(f"✅ Exported {len(visible)} tickets to {export_path}")
    else:
        print(f"  {len(visible)} tickets match the filters")

    return True


def launch_dashboard(port: int = DASHBOARD_PORT, open_browser: bool = True, source=None):
    """
    Launch the Streamlit dashboard as a managed subprocess.

    Args:
        port: TCP port for the Streamlit HTTP server.
        open_browser: If True, auto-open http://localhost:{port}.
        source: Ticket source URL or path passed through TICKETS_SOURCE.

    Returns:
        bool: True if the dashboard ran and exited cleanly (including Ctrl+C
              shutdown), False on errors.
    """
    print()
    print("=" * 60)
    print("  \U0001f310 Launching Ticket Dashboard")
    print("=" * 60)
    print()

    dashboard_path = get_dashboard_path()
    if not dashboard_path.exists():
        print(f"❌ Error: Dashboard not found at {dashboard_path}")
        return False

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        port_in_use = sock.connect_ex(('localhost', port)) == 0
        sock.close()
        if port_in_use:
            print(f"⚠️  Port {port} is already in use")
            print("   Please use a different port with --port flag")
            return False
    except OSError as e:
        logger.warning(f"Could not check port status: {e}")

    print(f"  \U0001f4ca Starting Streamlit server on port {port}...")
    print(f"  \U0001f517 URL: http://localhost:{port}")
    print()
    print("  Press Ctrl+C to stop the dashboard")
    print("-" * 60)
    sys.stdout.flush()

    env = dashboard_env(source)

    streamlit_process = None

    def cleanup():
        """Terminate the Streamlit subprocess on exit."""
        nonlocal streamlit_process
        if streamlit_process and streamlit_process.poll() is None:
            print("\n\U0001f9f9 Cleaning up dashboard process...")
            streamlit_process.terminate()
            try:
                streamlit_process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                print("   Force killing process...")
                streamlit_process.kill()

    atexit.register(cleanup)

    try:
        if open_browser:
            def open_browser_delayed():
                time.sleep(3)
                try:
                    webbrowser.open(f"http://localhost:{port}")
                except Exception as e:
                    logger.warning(f"Failed to open browser: {e}")

            import threading
            threading.Thread(target=open_browser_delayed, daemon=True).start()

        streamlit_process = subprocess.Popen(build_streamlit_command(port), env=env)
        streamlit_process.wait()
        return True

    except KeyboardInterrupt:
        print("\n\n✅ Dashboard stopped by user.")
        cleanup()
        return True
    except FileNotFoundError:
        print("\n❌ Streamlit not found. Install with: pip install streamlit plotly")
        return False
    except Exception as e:
        print(f"\n❌ Error launching dashboard: {e}")
        logger.error("Dashboard launch failed", exc_info=True)
        cleanup()
        return False


def main(argv=None):
    """
    Top-level entry point: parse CLI args and dispatch to the requested mode.
    """
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    if args.health_check:
        success = health_check(args.file)
        sys.exit(0 if success else 1)

    try:
        if args.dashboard_only:
            success = launch_dashboard(port=args.port,
                                       open_browser=not args.no_browser,
                                       source=args.file)
            if not success:
                sys.exit(1)

        elif args.no_gui:
            config = FilterConfig(category=args.category,
                                  escalate_only=args.escalate_only,
                                  query=args.query)
            try:
                success = run_headless(args.file, args.export, config)
            except ValueError as e:
                print(f"❌ {e}")
                sys.exit(2)
            if not success:
                sys.exit(1)
        else:
            pipeline = TicketPipeline(args.file)
            pipeline.load()
            print_category_summary(pipeline.run())
            success = launch_dashboard(port=args.port,
                                       open_browser=not args.no_browser,
                                       source=args.file)
            if not success:
                sys.exit(1)

    except KeyboardInterrupt:
        print("\n\n\U0001f44b Cancelled by user.")
        sys.exit(0)


if __name__ == "__main__":
    main()
