"""Inventory report assembly and export."""

from report.assembler import Report, ReportAssembler

__all__ = ["Report", "ReportAssembler"]
