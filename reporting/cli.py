#!/usr/bin/env python3
"""
CLI for vacancy readiness reports and the end-to-end demo.

Usage:
    python -m reporting.cli vacancy-report --vacancy-start <date> --target-move-in <date>
    python -m reporting.cli demo

Examples:
    # Report as of a fixed day, with one task already completed
    python -m reporting.cli vacancy-report --vacancy-start 2025-09-24 \\
        --target-move-in 2025-10-08 --today 2025-09-30 \\
        --status marketing_publish_listing=completed

    # JSON output including the full task list
    python -m reporting.cli vacancy-report --vacancy-start 2025-09-24 \\
        --target-move-in 2025-10-08 --include-tasks --json

    # Vacancy report plus a sample application through intake and evaluation
    python -m reporting.cli demo
"""

import argparse
import json
import sys
from datetime import date, timedelta

from core.applications import (
    ApplicationServiceError,
    InMemoryAlertPublisher,
    InMemoryApplicationRepository,
    VacancyApplicationService,
)
from core.vacancy import (
    TaskNotFoundError,
    VacancyWorkflowBlueprint,
    VacancyWorkflowInstance,
    parse_task_status,
)
from core.vacancy.insights import build_report_payload
from utils.config import Config
from utils.formatting import format_currency, format_date, format_days, format_ratio
from utils.logging import configure_logging

from .samples import create_sample_submission


def parse_date_arg(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"failed to parse '{value}' as YYYY-MM-DD"
        ) from None


def parse_status_arg(value: str) -> tuple:
    """argparse type for KEY=STATUS task updates."""
    key, sep, raw_status = value.partition("=")
    status = parse_task_status(raw_status) if sep else None
    if not key or status is None:
        raise argparse.ArgumentTypeError(
            f"expected KEY=STATUS with a known status, got '{value}'"
        )
    return key, status


def build_instance(vacancy_start: date, target_move_in: date, updates, today: date):
    """Standard workflow with the given status updates applied."""
    instance = VacancyWorkflowInstance(
        VacancyWorkflowBlueprint.standard(), vacancy_start, target_move_in
    )
    for key, status in updates:
        instance.set_status(key, status, today)
    return instance


# =============================================================================
# Rendering
# =============================================================================


def render_vacancy_report(payload: dict) -> None:
    """Print a vacancy report payload as text."""
    insights = payload["insights"]
    stages = payload["stage_progress"]
    completed = sum(stage["completed"] for stage in stages)
    total = sum(stage["total"] for stage in stages)
    completion = completed / total if total else 0.0

    print("Executive briefing")
    print(
        f"- {insights['readiness_label']} readiness ({insights['readiness_score']}%) with "
        f"{len(payload['overdue_tasks'])} overdue tasks and "
        f"{len(payload['compliance_alerts'])} compliance alerts in scope."
    )
    print(
        f"- Focus: {insights.get('focus_stage', 'no single stage flagged')} | "
        f"expected pace {format_ratio(insights['expected_completion_pct'])} | "
        f"actual completion {format_ratio(completion)}."
    )
    blockers = insights.get("blockers", [])
    print(f"- Blocker to highlight: {blockers[0] if blockers else 'none flagged'}")
    actions = insights.get("recommended_actions", [])
    if actions:
        print(f"- Priority follow-up: {actions[0]}")

    print("\nStage progress")
    for stage in stages:
        print(f"- {stage['stage_label']}: {stage['completed']}/{stage['total']} tasks completed")

    print("\nRole workload")
    for load in payload["role_load"]:
        print(f"- {load['role_label']}: {load['open']} open, {load['overdue']} overdue")

    if not payload["overdue_tasks"]:
        print("\nOverdue tasks: none")
    else:
        print("\nOverdue tasks")
        for task in payload["overdue_tasks"]:
            due = date.fromisoformat(task["due_date"])
            print(
                f"- {task['name']} ({task['stage_label']}), role {task['role_label']}, "
                f"due {format_date(due)}, status {task['status_label']}"
            )

    if not payload["compliance_alerts"]:
        print("\nCompliance alerts: none")
    else:
        print("\nCompliance alerts")
        for alert in payload["compliance_alerts"]:
            print(f"- [{alert['severity_label']}] {alert['topic']}: {alert['detail']}")

    print(
        f"\nReadiness score: {insights['readiness_score']}% ({insights['readiness_label']})"
    )
    print(
        f"Expected pace {format_ratio(insights['expected_completion_pct'])} | "
        f"Days since vacancy {insights['days_since_vacancy']} | "
        f"Move-in {format_days(insights['days_until_move_in'])}"
    )

    for heading, key in (
        ("AI observations", "ai_observations"),
        ("Recommended actions", "recommended_actions"),
        ("Automation triggers", "automation_triggers"),
    ):
        values = insights.get(key, [])
        if values:
            print(f"\n{heading}")
            for value in values:
                print(f"- {value}")

    if "tasks" in payload:
        print("\nTask list")
        for task in payload["tasks"]:
            due = date.fromisoformat(task["due_date"])
            print(
                f"- {format_date(due)}  {task['name']} [{task['status_label']}] "
                f"({task['role_label']})"
            )


# =============================================================================
# Commands
# =============================================================================


def cmd_vacancy_report(args):
    """Print a vacancy readiness report."""
    today = args.today or date.today()
    try:
        instance = build_instance(args.vacancy_start, args.target_move_in, args.status, today)
    except TaskNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    payload = build_report_payload(instance, today, include_tasks=args.include_tasks)
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        render_vacancy_report(payload)
    return 0


def cmd_demo(args):
    """Run the vacancy report and a sample application end to end."""
    vacancy_start = args.vacancy_start or date.today()
    target_move_in = args.target_move_in or vacancy_start + timedelta(days=14)
    today = args.today or date.today()
    config = Config.load()

    print("=================================================")
    print("         Tenant Vacancy Engine Demo")
    print("=================================================")
    print(f"Date of report: {format_date(today)}")
    print(f"Vacancy window: {format_date(vacancy_start)} -> {format_date(target_move_in)}")
    print()

    print("--- 1. Vacancy Workflow Analysis ---")
    instance = build_instance(vacancy_start, target_move_in, [], today)
    render_vacancy_report(
        build_report_payload(instance, today, include_tasks=args.include_tasks)
    )

    if args.skip_application:
        return 0

    print()
    print("--- 2. Application Intake & Evaluation ---")
    alerts = InMemoryAlertPublisher()
    service = VacancyApplicationService(
        repository=InMemoryApplicationRepository(),
        alerts=alerts,
        config=config.evaluation_config(),
    )
    submission = create_sample_submission(requested_move_in=target_move_in)
    listing = submission.listing

    try:
        record = service.submit(submission)
        print(
            f"Submitted {record.application_id} for unit {listing.unit_id} "
            f"({format_currency(listing.listed_rent)}/month, "
            f"deposit {format_currency(listing.deposit_required)})"
        )
        outcome = service.evaluate(record.application_id)
    except ApplicationServiceError as e:
        print(f"Error: {e.category} failure: {e}", file=sys.stderr)
        return 1

    print(f"Decision: {outcome.decision.summary()} (score {outcome.total_score})")
    for component in outcome.components:
        print(f"- {component.factor.value}: {component.score:+d} ({component.notes})")
    for alert in alerts.events():
        print(f"Alert published: {alert.template} for {alert.application_id}")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tenant Vacancy Engine - readiness reports and screening demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m reporting.cli vacancy-report --vacancy-start 2025-09-24 --target-move-in 2025-10-08
    python -m reporting.cli demo --skip-application
        """,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (defaults to LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Vacancy report command
    report_parser = subparsers.add_parser(
        "vacancy-report",
        help="Generate a vacancy workflow report",
    )
    report_parser.add_argument("--vacancy-start", type=parse_date_arg, required=True)
    report_parser.add_argument("--target-move-in", type=parse_date_arg, required=True)
    report_parser.add_argument(
        "--today",
        type=parse_date_arg,
        help="Evaluation date for the report (defaults to today)",
    )
    report_parser.add_argument(
        "--status",
        type=parse_status_arg,
        action="append",
        default=[],
        metavar="KEY=STATUS",
        help="Apply a task status before reporting (repeatable)",
    )
    report_parser.add_argument(
        "--include-tasks",
        action="store_true",
        help="Include the full task listing",
    )
    report_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    report_parser.set_defaults(func=cmd_vacancy_report)

    # Demo command
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run the vacancy and application workflows end to end",
    )
    demo_parser.add_argument("--vacancy-start", type=parse_date_arg)
    demo_parser.add_argument("--target-move-in", type=parse_date_arg)
    demo_parser.add_argument("--today", type=parse_date_arg)
    demo_parser.add_argument("--include-tasks", action="store_true")
    demo_parser.add_argument(
        "--skip-application",
        action="store_true",
        help="Skip the application intake portion",
    )
    demo_parser.set_defaults(func=cmd_demo)

    args = parser.parse_args(argv)
    configure_logging(args.log_level or Config.load().log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
