"""
Unit tests for run.py

Tests the major functions in the run.py entry point script including:
- Path validation and security
- Health checks
- Argument parsing and mode dispatch
- Headless classification and export
- Logging setup
"""

import unittest
from unittest.mock import patch, MagicMock
from pathlib import Path
import csv
import logging
import os
import sys
import tempfile
import shutil

# Add parent directory to path to import run module
sys.path.insert(0, str(Path(__file__).parent.parent))

import run
from ticket_triage.models.data_models import FilterConfig
from tests.fixtures.sample_data import create_sample_json_file


class WorkDirTestCase(unittest.TestCase):
    """Runs each test inside a fresh temporary working directory."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp()).resolve()
        self.old_cwd = os.getcwd()
        os.chdir(self.test_dir)

    def tearDown(self):
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()
        os.chdir(self.old_cwd)
        if self.test_dir.exists():
            shutil.rmtree(self.test_dir)


class TestPathValidation(WorkDirTestCase):
    """Test suite for path validation and security functions."""

    def setUp(self):
        super().setUp()
        self.test_file = self.test_dir / "tickets.json"
        self.test_file.write_text("{}")

    def test_validate_existing_file(self):
        result = run.validate_file_path(str(self.test_file), must_exist=True)
        self.assertIsInstance(result, Path)
        self.assertTrue(result.exists())

    def test_validate_relative_path(self):
        result = run.validate_file_path("out/export.csv")
        self.assertEqual(result, self.test_dir / "out" / "export.csv")

    def test_validate_nonexistent_file_without_requirement(self):
        nonexistent = self.test_dir / "nonexistent.json"
        result = run.validate_file_path(str(nonexistent), must_exist=False)
        self.assertIsInstance(result, Path)

    def test_validate_nonexistent_file_with_requirement(self):
        nonexistent = self.test_dir / "nonexistent.json"
        with self.assertRaises(ValueError) as context:
            run.validate_file_path(str(nonexistent), must_exist=True)
        self.assertIn("File not found", str(context.exception))

    @patch('run.Path.home')
    def test_prevent_path_traversal(self, mock_home):
        """Paths outside the working and home directories are rejected."""
        mock_home.return_value = self.test_dir
        with self.assertRaises(ValueError) as context:
            run.validate_file_path('/etc/passwd', must_exist=False)
        self.assertIn("outside allowed directories", str(context.exception))

    @patch('run.Path.home')
    def test_prevent_sibling_with_shared_prefix(self, mock_home):
        """A sibling directory whose name extends the working dir is not inside it."""
        mock_home.return_value = self.test_dir
        with self.assertRaises(ValueError) as context:
            run.validate_file_path(str(self.test_dir) + "_evil/out.csv")
        self.assertIn("outside allowed directories", str(context.exception))

    def test_sanitize_filename_removes_dangerous_chars(self):
        sanitized = run.sanitize_filename("../../bad;file|name*.csv")
        self.assertNotIn('/', sanitized)
        self.assertNotIn(';', sanitized)
        self.assertNotIn('|', sanitized)
        self.assertNotIn('*', sanitized)

    def test_sanitize_filename_keeps_valid_chars(self):
        valid = "Escalated_Tickets-2024.csv"
        self.assertEqual(run.sanitize_filename(valid), valid)

    def test_sanitize_filename_limits_length(self):
        self.assertLessEqual(len(run.sanitize_filename("a" * 300 + ".csv")), 255)


class TestHealthCheck(unittest.TestCase):
    """Test suite for health check functionality."""

    @patch('run.check_ticket_source')
    @patch('run.check_required_packages')
    def test_health_check_all_pass(self, mock_packages, mock_source):
        mock_packages.return_value = (True, [])
        mock_source.return_value = (True, 15)

        self.assertTrue(run.health_check())

    @patch('run.check_ticket_source')
    @patch('run.check_required_packages')
    def test_health_check_missing_packages(self, mock_packages, mock_source):
        mock_packages.return_value = (False, ['streamlit', 'plotly'])
        mock_source.return_value = (True, 15)

        self.assertFalse(run.health_check())

    @patch('run.check_ticket_source')
    @patch('run.check_required_packages')
    def test_health_check_empty_source(self, mock_packages, mock_source):
        mock_packages.return_value = (True, [])
        mock_source.return_value = (False, 0)

        self.assertFalse(run.health_check())

    @patch('run.load_tickets')
    def test_check_ticket_source(self, mock_load):
        mock_load.return_value = [MagicMock(), MagicMock()]
        self.assertEqual(run.check_ticket_source("tickets.json"), (True, 2))

        mock_load.return_value = []
        self.assertEqual(run.check_ticket_source("tickets.json"), (False, 0))

    def test_check_required_packages_returns_tuple(self):
        all_installed, missing = run.check_required_packages()
        self.assertIsInstance(all_installed, bool)
        self.assertIsInstance(missing, list)

    @patch('builtins.__import__')
    def test_check_required_packages_missing(self, mock_import):
        def import_side_effect(name, *args, **kwargs):
            if name in ['streamlit', 'plotly']:
                raise ImportError(f"No module named '{name}'")
            return MagicMock()

        mock_import.side_effect = import_side_effect

        all_installed, missing = run.check_required_packages()

        self.assertFalse(all_installed)
        self.assertEqual(sorted(missing), ['plotly', 'streamlit'])


class TestArgumentParsing(unittest.TestCase):
    """Test suite for command-line argument parsing."""

    def test_parse_args_defaults(self):
        args = run.parse_args([])

        self.assertEqual(args.port, 8501)
        self.assertEqual(args.category, "All")
        self.assertEqual(args.query, "")
        self.assertFalse(args.escalate_only)
        self.assertFalse(args.no_gui)
        self.assertFalse(args.dashboard_only)
        self.assertFalse(args.verbose)
        self.assertFalse(args.health_check)
        self.assertIsNone(args.file)
        self.assertIsNone(args.export)

    def test_parse_args_headless_filters(self):
        args = run.parse_args(['--no-gui', '--file', 'tickets.json', '--export', 'out.csv',
                               '--category', 'Bugs & Errors', '--escalate-only', '-q', 'crash'])

        self.assertTrue(args.no_gui)
        self.assertEqual(args.file, 'tickets.json')
        self.assertEqual(args.export, 'out.csv')
        self.assertEqual(args.category, 'Bugs & Errors')
        self.assertTrue(args.escalate_only)
        self.assertEqual(args.query, 'crash')

    def test_parse_args_custom_port(self):
        self.assertEqual(run.parse_args(['--port', '8502']).port, 8502)

    def test_no_gui_and_dashboard_only_conflict(self):
        with patch('sys.stderr'):
            with self.assertRaises(SystemExit):
                run.parse_args(['--no-gui', '--dashboard-only'])

    def test_parse_args_reads_sys_argv(self):
        with patch('sys.argv', ['run.py', '--health-check', '--verbose']):
            args = run.parse_args()

        self.assertTrue(args.health_check)
        self.assertTrue(args.verbose)


class TestHeadlessRun(WorkDirTestCase):
    """Test suite for run_headless() and main() dispatch."""

    def setUp(self):
        super().setUp()
        self.source = create_sample_json_file(self.test_dir / "tickets.json")

    def test_export_escalated_only(self):
        export = self.test_dir / "escalated.csv"
        ok = run.run_headless(str(self.source), str(export), FilterConfig(escalate_only=True))

        self.assertTrue(ok)
        with open(export, newline='', encoding='utf-8') as fh:
            rows = list(csv.reader(fh))
        self.assertEqual(rows[0][0], 'category')
        self.assertEqual(len(rows), 4)
        self.assertTrue(all(r[-1] == 'YES' for r in rows[1:]))

    def test_without_export(self):
        self.assertTrue(run.run_headless(str(self.source)))

    def test_empty_source(self):
        self.assertFalse(run.run_headless(str(self.test_dir / "missing.json")))

    @patch('run.setup_logging')
    @patch('run.run_headless')
    def test_main_no_gui(self, mock_headless, mock_logging):
        mock_headless.return_value = True
        run.main(['--no-gui', '--category', 'Feature Request'])

        source, export, config = mock_headless.call_args.args
        self.assertIsNone(source)
        self.assertIsNone(export)
        self.assertEqual(config, FilterConfig(category='Feature Request'))

    @patch('run.setup_logging')
    @patch('run.run_headless')
    def test_main_no_gui_failure_exits(self, mock_headless, mock_logging):
        mock_headless.return_value = False
        with self.assertRaises(SystemExit) as context:
            run.main(['--no-gui'])
        self.assertEqual(context.exception.code, 1)

    @patch('run.setup_logging')
    @patch('run.print_category_summary')
    @patch('run.launch_dashboard')
    def test_main_default_prints_summary_then_launches(self, mock_launch, mock_summary,
                                                       mock_logging):
        mock_launch.return_value = True
        run.main(['--port', '8600', '--no-browser', '--file', str(self.source)])

        self.assertEqual(mock_summary.call_args.args[0].total, 7)
        mock_launch.assert_called_once_with(port=8600, open_browser=False,
                                            source=str(self.source))

    @patch('run.setup_logging')
    @patch('run.TicketPipeline')
    @patch('run.launch_dashboard')
    def test_main_dashboard_only_skips_summary(self, mock_launch, mock_pipeline, mock_logging):
        mock_launch.return_value = True
        run.main(['--dashboard-only', '--no-browser'])

        mock_pipeline.assert_not_called()
        mock_launch.assert_called_once_with(port=8501, open_browser=False, source=None)


class TestLogging(WorkDirTestCase):
    """Test suite for logging configuration."""

    def test_setup_logging_writes_under_working_dir(self):
        log_file = run.setup_logging(verbose=False)

        self.assertEqual(log_file.parent, self.test_dir / "logs")
        self.assertTrue(log_file.name.startswith("ticket_triage_"))

    def test_setup_logging_ignores_install_location(self):
        """An installed run.py may live in a read-only prefix."""
        with patch.object(run, '__file__', '/nonexistent/site-packages/run.py'):
            log_file = run.setup_logging(verbose=False)

        self.assertTrue(log_file.exists())
        self.assertFalse(Path('/nonexistent/site-packages/logs').exists())

    def test_setup_logging_verbose_mode(self):
        run.setup_logging(verbose=True)

        root_logger = logging.getLogger()
        self.assertEqual(root_logger.level, logging.DEBUG)
        self.assertEqual(len(root_logger.handlers), 2)


if __name__ == '__main__':
    unittest.main()
