"""Orchestration module."""
from .processor import ReportOrchestrator, RunResult

__all__ = ["ReportOrchestrator", "RunResult"]
