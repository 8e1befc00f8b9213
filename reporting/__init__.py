"""
Reporting module for the Tenant Vacancy Engine.

Command line rendering of vacancy readiness reports and an end-to-end demo
of application intake and evaluation.

Usage:
    python -m reporting.cli vacancy-report --vacancy-start 2025-09-24 --target-move-in 2025-10-08
    python -m reporting.cli demo
"""

from .samples import create_sample_submission

__all__ = ["create_sample_submission"]
