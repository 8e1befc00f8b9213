"""
Tests for the Vacancy Workflow Engine

Tests cover:
- Standard catalog structure
- Due date resolution
- Status transitions and TaskNotFoundError
- Report aggregation, overdue ordering and alert severity
- Report idempotence and summary ordering
"""

from datetime import date, timedelta

import pytest

from core.vacancy import (
    ComplianceSeverity,
    DueDateRule,
    TaskNotFoundError,
    TaskStatus,
    VacancyRole,
    VacancyStage,
    VacancyWorkflowBlueprint,
    VacancyWorkflowInstance,
    parse_task_status,
    standard_task_templates,
)

VACANCY_START = date(2025, 9, 24)
TARGET_MOVE_IN = VACANCY_START + timedelta(days=14)


def statuses(instance):
    return [(task.key, task.status, task.completed_on) for task in instance.tasks()]


# =============================================================================
# Catalog
# =============================================================================


class TestBlueprint:
    """Tests for the standard task catalog."""

    def test_standard_catalog_has_ten_tasks(self, blueprint):
        assert len(blueprint) == 10
        assert len(blueprint.tasks_for_stage(VacancyStage.SCREENING_AND_APPLICATION)) == 3
        assert len(blueprint.tasks_for_stage(VacancyStage.LEASE_SIGNING_AND_MOVE_IN)) == 4
        assert len(blueprint.tasks_for_stage(VacancyStage.HANDOFF)) == 1

    def test_marketing_stage_structure(self, blueprint):
        marketing = blueprint.tasks_for_stage(VacancyStage.MARKETING_AND_ADVERTISING)
        assert [task.key for task in marketing] == [
            "marketing_publish_listing",
            "marketing_update_appfolio",
        ]

        publish = marketing[0]
        assert publish.primary_role == VacancyRole.LEASING_AGENT
        assert any("listing" in step and "photos" in step for step in publish.deliverables)
        assert any(
            "Iowa Code" in note.topic and "562A.29" in note.detail
            for note in publish.compliance
        )

    def test_manage_inquiries_mentions_fair_housing(self, blueprint):
        template = blueprint.get_template("screening_manage_inquiries")
        assert template is not None
        assert any("fair housing" in step.lower() for step in template.deliverables)

    def test_lihtc_certification_owned_by_compliance(self, blueprint):
        template = blueprint.get_template("leasing_lihtc_certification")
        assert template.stage == VacancyStage.LEASE_SIGNING_AND_MOVE_IN
        assert template.primary_role == VacancyRole.COMPLIANCE_COORDINATOR

    def test_unknown_template_returns_none(self, blueprint):
        assert blueprint.get_template("unknown_key") is None

    def test_duplicate_keys_rejected(self):
        templates = standard_task_templates()
        with pytest.raises(ValueError):
            VacancyWorkflowBlueprint(templates + [templates[0]])

    def test_templates_are_immutable(self, blueprint):
        template = blueprint.task_templates()[0]
        with pytest.raises(AttributeError):
            template.name = "changed"


# =============================================================================
# Due Dates
# =============================================================================


class TestDueDates:
    """Tests for due date resolution."""

    def test_days_from_vacancy(self):
        rule = DueDateRule.days_from_vacancy(2)
        assert rule.resolve(VACANCY_START, TARGET_MOVE_IN) == date(2025, 9, 26)

    def test_days_before_move_in_ignores_vacancy_start(self):
        rule = DueDateRule.days_before_move_in(5)
        assert rule.resolve(VACANCY_START, TARGET_MOVE_IN) == date(2025, 10, 3)
        assert rule.resolve(date(2024, 1, 1), TARGET_MOVE_IN) == date(2025, 10, 3)

    def test_on_move_in(self):
        assert DueDateRule.on_move_in().resolve(VACANCY_START, TARGET_MOVE_IN) == TARGET_MOVE_IN

    def test_negative_days_before_move_in_rejected(self):
        with pytest.raises(ValueError):
            DueDateRule.days_before_move_in(-1)

    def test_due_date_before_vacancy_not_clamped(self):
        """A short window can put a move-in deadline before the vacancy start."""
        move_in = VACANCY_START + timedelta(days=2)
        rule = DueDateRule.days_before_move_in(5)
        assert rule.resolve(VACANCY_START, move_in) == VACANCY_START - timedelta(days=3)

    def test_instance_resolves_catalog_due_dates(self, instance):
        due = {task.key: task.due_date for task in instance.tasks()}
        assert due["marketing_publish_listing"] == VACANCY_START
        assert due["screening_process_applications"] == date(2025, 9, 26)
        assert due["leasing_prepare_agreement"] == date(2025, 9, 29)
        assert due["leasing_collect_funds"] == date(2025, 10, 3)
        assert due["leasing_lihtc_certification"] == date(2025, 10, 5)
        assert due["leasing_conduct_move_in_inspection"] == TARGET_MOVE_IN
        assert due["handoff_start_new_resident_workflow"] == TARGET_MOVE_IN

    def test_new_instance_tasks_not_started(self, instance):
        assert all(task.status == TaskStatus.NOT_STARTED for task in instance.tasks())
        assert all(task.completed_on is None for task in instance.tasks())


# =============================================================================
# Status Transitions
# =============================================================================


class TestSetStatus:
    """Tests for task status transitions."""

    def test_completed_records_completion_date(self, instance):
        instance.set_status("marketing_publish_listing", TaskStatus.COMPLETED, VACANCY_START)

        task = instance.get_task("marketing_publish_listing")
        assert task.status == TaskStatus.COMPLETED
        assert task.completed_on == VACANCY_START

    def test_completion_date_ignored_for_other_statuses(self, instance):
        instance.set_status("marketing_publish_listing", TaskStatus.IN_PROGRESS, VACANCY_START)

        task = instance.get_task("marketing_publish_listing")
        assert task.status == TaskStatus.IN_PROGRESS
        assert task.completed_on is None

    def test_completed_task_can_be_reopened(self, instance):
        instance.set_status("marketing_publish_listing", TaskStatus.COMPLETED, VACANCY_START)
        instance.set_status("marketing_publish_listing", TaskStatus.NOT_STARTED)

        task = instance.get_task("marketing_publish_listing")
        assert task.status == TaskStatus.NOT_STARTED
        assert task.completed_on is None

    def test_completed_without_date_kept_as_given(self, instance):
        instance.set_status("marketing_publish_listing", TaskStatus.COMPLETED)
        assert instance.get_task("marketing_publish_listing").completed_on is None

    def test_unknown_key_raises_without_mutation(self, instance):
        instance.set_status("marketing_update_appfolio", TaskStatus.BLOCKED)
        before = statuses(instance)

        with pytest.raises(TaskNotFoundError) as exc_info:
            instance.set_status("unknown_key", TaskStatus.COMPLETED, VACANCY_START)

        assert exc_info.value.key == "unknown_key"
        assert str(exc_info.value) == "task with key unknown_key not found"
        assert statuses(instance) == before

    def test_parse_task_status(self):
        assert parse_task_status("completed") == TaskStatus.COMPLETED
        assert parse_task_status("In Progress") == TaskStatus.IN_PROGRESS
        assert parse_task_status("not-started") == TaskStatus.NOT_STARTED
        assert parse_task_status("done") is None


# =============================================================================
# Reports
# =============================================================================


class TestReport:
    """Tests for report aggregation."""

    @pytest.fixture
    def day_before_move_in_report(self, instance):
        instance.set_status("marketing_update_appfolio", TaskStatus.COMPLETED, VACANCY_START)
        instance.set_status("screening_process_applications", TaskStatus.IN_PROGRESS)
        return instance.report(TARGET_MOVE_IN - timedelta(days=1))

    def test_overdue_tasks_sorted_by_due_date(self, day_before_move_in_report):
        overdue = day_before_move_in_report.overdue_tasks
        assert [task.key for task in overdue] == [
            "marketing_publish_listing",
            "screening_manage_inquiries",
            "screening_process_applications",
            "screening_notify_applicants",
            "leasing_prepare_agreement",
            "leasing_collect_funds",
            "leasing_lihtc_certification",
        ]
        due_dates = [task.due_date for task in overdue]
        assert due_dates == sorted(due_dates)

    def test_alert_severity(self, day_before_move_in_report):
        alerts = day_before_move_in_report.compliance_alerts
        critical = [a for a in alerts if a.severity == ComplianceSeverity.CRITICAL]
        warning = [a for a in alerts if a.severity == ComplianceSeverity.WARNING]

        # process_applications carries two notes
        assert len(critical) == 8
        assert {a.task_key for a in warning} == {
            "leasing_conduct_move_in_inspection",
            "handoff_start_new_resident_workflow",
        }
        assert all(a.task_key != "marketing_update_appfolio" for a in alerts)

    def test_stage_progress(self, day_before_move_in_report):
        progress = day_before_move_in_report.stage_progress
        marketing = progress[VacancyStage.MARKETING_AND_ADVERTISING]
        assert (marketing.completed, marketing.total) == (1, 2)
        lease = progress[VacancyStage.LEASE_SIGNING_AND_MOVE_IN]
        assert (lease.completed, lease.total) == (0, 4)

    def test_role_load(self, day_before_move_in_report):
        load = day_before_move_in_report.role_load
        assert (load[VacancyRole.LEASING_AGENT].open, load[VacancyRole.LEASING_AGENT].overdue) == (5, 5)
        assert load[VacancyRole.PROPERTY_MANAGER].open == 2
        assert load[VacancyRole.PROPERTY_MANAGER].overdue == 0
        assert load[VacancyRole.COMPLIANCE_COORDINATOR].overdue == 1
        assert load[VacancyRole.PROPERTY_MANAGER_ACCOUNTING].overdue == 1

    def test_task_due_on_vacancy_start_overdue_next_day(self, instance):
        report = instance.report(VACANCY_START + timedelta(days=1))

        assert "marketing_publish_listing" in [task.key for task in report.overdue_tasks]
        publish_alerts = [
            alert for alert in report.compliance_alerts
            if alert.task_key == "marketing_publish_listing"
        ]
        assert publish_alerts
        assert all(alert.severity == ComplianceSeverity.CRITICAL for alert in publish_alerts)

    def test_task_due_today_is_not_overdue(self, instance):
        report = instance.report(VACANCY_START)
        assert report.overdue_tasks == []
        assert all(
            alert.severity == ComplianceSeverity.WARNING for alert in report.compliance_alerts
        )

    def test_open_tasks_warn_before_due(self, instance):
        report = instance.report(VACANCY_START - timedelta(days=7))
        assert len(report.compliance_alerts) == 11

    def test_report_is_idempotent(self, instance):
        instance.set_status("marketing_publish_listing", TaskStatus.COMPLETED, VACANCY_START)
        today = date(2025, 10, 1)

        first = instance.report(today)
        second = instance.report(today)

        assert first == second
        assert [t.key for t in first.overdue_tasks] == [t.key for t in second.overdue_tasks]

    def test_all_completed_has_no_alerts(self, instance):
        for task in instance.tasks():
            instance.set_status(task.key, TaskStatus.COMPLETED, VACANCY_START)

        report = instance.report(TARGET_MOVE_IN + timedelta(days=5))
        assert report.overdue_tasks == []
        assert report.compliance_alerts == []


class TestReportSummary:
    """Tests for ordered report views."""

    def test_stages_and_roles_in_enum_order(self, instance):
        summary = instance.report(VACANCY_START).summary()

        assert [entry.stage for entry in summary.stage_progress] == list(VacancyStage.ordered())
        assert [entry.role for entry in summary.role_load] == list(VacancyRole.ordered())
        assert summary.stage_progress[0].stage_label == "Marketing & Advertising"

    def test_summary_to_dict_serialises_dates(self, instance):
        summary = instance.report(TARGET_MOVE_IN).summary()
        data = summary.to_dict()

        assert data["overdue_tasks"][0]["due_date"] == "2025-09-24"
        assert data["overdue_tasks"][0]["status_label"] == "Not Started"
        assert data["compliance_alerts"][0]["severity"] == "critical"

    def test_task_details_sorted_by_due_date(self, instance):
        details = instance.task_details()

        assert len(details) == 10
        assert [d.due_date for d in details] == sorted(d.due_date for d in details)
        assert details[0].key == "marketing_publish_listing"
        assert details[-1].key == "handoff_start_new_resident_workflow"
