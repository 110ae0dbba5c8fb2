import json
import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from dashboard_importer.pipeline import (main, process_dashboard_batch,
                                         scan_for_dashboards)


class TestPipeline(unittest.TestCase):
    """Tests for batch import orchestration."""

    def setUp(self):
        """Set up temporary input and output directories."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.input_dir = os.path.join(self.temp_dir.name, "input")
        self.output_dir = os.path.join(self.temp_dir.name, "output")
        os.makedirs(self.input_dir)

        dashboard = {
            "title": "API",
            "templating": {"list": []},
            "panels": [
                {"type": "stat", "title": "Requests", "targets": [{"refId": "A", "expr": "sum(rate(http_requests_total[$__interval]))"}]}
            ],
        }
        for name in ["b.json", "a.json"]:
            with open(os.path.join(self.input_dir, name), "w") as f:
                json.dump(dashboard, f)
        with open(os.path.join(self.input_dir, "notes.txt"), "w") as f:
            f.write("not an export")

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_scan_for_dashboards(self):
        files = scan_for_dashboards(self.input_dir)
        self.assertEqual(
            [os.path.basename(path) for path in files], ["a.json", "b.json"]
        )

    def test_scan_missing_directory(self):
        self.assertEqual(scan_for_dashboards(os.path.join(self.temp_dir.name, "nope")), [])

    @patch("dashboard_importer.pipeline.import_files_processed")
    @patch("dashboard_importer.pipeline.import_errors")
    @patch("dashboard_importer.pipeline.process_dashboards")
    def test_failed_file_does_not_stop_batch(
        self, mock_process, mock_import_errors, mock_files_processed
    ):
        mock_import_errors.inc = MagicMock()
        mock_files_processed.inc = MagicMock()
        mock_process.side_effect = [OSError("disk full"), {"processed": 1, "valid": 1}]

        stats = process_dashboard_batch(self.input_dir, output_path=self.output_dir)

        self.assertEqual(mock_process.call_count, 2)
        mock_import_errors.inc.assert_called_once()
        self.assertEqual(mock_files_processed.inc.call_count, 2)
        self.assertEqual(stats["total_dashboards"], 1)
        self.assertEqual(len(stats["files_processed"]), 1)

    @patch("dashboard_importer.pipeline.process_dashboards")
    def test_unexpected_error_does_not_stop_batch(self, mock_process):
        mock_process.side_effect = [RuntimeError("boom"), {"processed": 1, "valid": 1}]

        stats = process_dashboard_batch(self.input_dir, output_path=self.output_dir)

        self.assertEqual(mock_process.call_count, 2)
        self.assertEqual(stats["converted_dashboards"], 1)

    def test_invalid_utf8_file_does_not_stop_batch(self):
        with open(os.path.join(self.input_dir, "a_latin.json"), "wb") as f:
            f.write(b'{"title": "caf\xe9", "panels": [], "templating": {}}')

        stats = process_dashboard_batch(self.input_dir, output_path=self.output_dir)

        self.assertEqual(len(stats["files_processed"]), 3)
        self.assertEqual(stats["converted_dashboards"], 2)
        self.assertEqual(stats["invalid_dashboards"], 1)
        self.assertTrue(os.path.exists(os.path.join(self.output_dir, "b_converted.json.gz")))

    def test_process_dashboard_batch(self):
        stats = process_dashboard_batch(self.input_dir, output_path=self.output_dir)

        self.assertEqual(stats["total_dashboards"], 2)
        self.assertEqual(stats["converted_dashboards"], 2)
        self.assertEqual(stats["panels_imported"], 2)
        self.assertTrue(os.path.exists(os.path.join(self.output_dir, "a_converted.json.gz")))
        self.assertTrue(os.listdir(os.path.join(self.output_dir, "stats")))

    @patch("dashboard_importer.pipeline.push_metrics")
    def test_main_ci_mode_skips_push(self, mock_push):
        stats = main(
            ["--input-path", self.input_dir, "--output-path", self.output_dir, "--ci-mode"]
        )
        mock_push.assert_not_called()
        self.assertEqual(stats["converted_dashboards"], 2)

    @patch.dict(os.environ, {"DISABLE_METRICS_PUSH": "0"})
    @patch("dashboard_importer.pipeline.push_metrics")
    def test_main_pushes_metrics(self, mock_push):
        main(["--input-path", self.input_dir, "--output-path", self.output_dir])
        mock_push.assert_called_once_with(job_name="dashboard_import")


if __name__ == "__main__":
    unittest.main()
