"""
Tests for the reporting CLI.
"""

import argparse
import json

import pytest

from core.vacancy import TaskStatus
from reporting.cli import main, parse_date_arg, parse_status_arg


REPORT_ARGS = [
    "vacancy-report",
    "--vacancy-start", "2025-09-24",
    "--target-move-in", "2025-10-08",
    "--today", "2025-09-25",
]


class TestArgumentTypes:

    def test_parse_date(self):
        assert parse_date_arg("2025-09-24").isoformat() == "2025-09-24"

    def test_parse_date_rejects_malformed(self):
        with pytest.raises(argparse.ArgumentTypeError, match="YYYY-MM-DD"):
            parse_date_arg("09/24/2025")

    def test_parse_status(self):
        assert parse_status_arg("marketing_publish_listing=In Progress") == (
            "marketing_publish_listing",
            TaskStatus.IN_PROGRESS,
        )

    @pytest.mark.parametrize("raw", ["marketing_publish_listing", "=completed", "key=done"])
    def test_parse_status_rejects_malformed(self, raw):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_status_arg(raw)


class TestVacancyReportCommand:

    def test_json_output(self, capsys):
        exit_code = main(REPORT_ARGS + ["--json", "--include-tasks"])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["today"] == "2025-09-25"
        assert len(payload["tasks"]) == 10
        overdue = [task["key"] for task in payload["overdue_tasks"]]
        assert "marketing_publish_listing" in overdue

    def test_status_updates_applied(self, capsys):
        exit_code = main(
            REPORT_ARGS
            + [
                "--status", "marketing_publish_listing=completed",
                "--status", "marketing_update_appfolio=completed",
                "--json",
            ]
        )

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["stage_progress"][0]["completed"] == 2

    def test_text_output(self, capsys):
        assert main(REPORT_ARGS) == 0

        out = capsys.readouterr().out
        assert "Executive briefing" in out
        assert "Marketing & Advertising: 0/2 tasks completed" in out
        assert "Readiness score:" in out

    def test_unknown_task_key(self, capsys):
        exit_code = main(REPORT_ARGS + ["--status", "non_existent_task=completed"])

        assert exit_code == 1
        assert "non_existent_task" in capsys.readouterr().err


class TestDemoCommand:

    DEMO_ARGS = [
        "demo",
        "--vacancy-start", "2025-09-24",
        "--target-move-in", "2025-10-08",
        "--today", "2025-09-30",
    ]

    def test_full_demo(self, capsys):
        assert main(self.DEMO_ARGS) == 0

        out = capsys.readouterr().out
        assert "1. Vacancy Workflow Analysis" in out
        assert "Submitted app-000001 for unit A-201" in out
        assert "Decision: application approved (score 70)" in out
        assert "Alert published: applicant_approved for app-000001" in out

    def test_skip_application(self, capsys):
        assert main(self.DEMO_ARGS + ["--skip-application"]) == 0

        out = capsys.readouterr().out
        assert "2. Application Intake" not in out
