# File: site_parity/report/__init__.py
"""site_parity.report: JSON and HTML report files used by the CLI."""

from __future__ import annotations

from site_parity.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from site_parity.report.json_report import render_json

__all__ = ["DEFAULT_TEMPLATE_DIR", "render_json", "render_html"]
