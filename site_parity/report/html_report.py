# File: site_parity/report/html_report.py
"""site_parity.report.html_report: HTML reports rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_parity.aggregator import MigrationReport
from site_parity.models import ExtractionResult

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

#: anchor text longer than this is cut in tables
ANCHOR_PREVIEW = 50


def shorten(text: str, limit: int = ANCHOR_PREVIEW) -> str:
    return f"{text[:limit]}..." if len(text) > limit else text


def _context(report: Union[ExtractionResult, MigrationReport]) -> tuple[str, dict[str, Any]]:
    if isinstance(report, MigrationReport):
        comparison = report.comparison
        return "compare.html.j2", {
            "old": report.old,
            "new": report.new,
            "comparison": comparison,
            "sections": [
                ("Shared links", comparison.shared),
                ("Missing internal links", comparison.missing_internal),
                ("Missing external links", comparison.missing_external),
                ("Old site links", report.old.links),
                ("New site links", report.new.links),
            ],
        }
    return "scrape.html.j2", {"page": report}


def render_html(
    report: Union[ExtractionResult, MigrationReport],
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Render *report* through its template and save it.

    Args:
        report: result of ``scrape`` (``scrape.html.j2``) or ``compare``
            (``compare.html.j2``).
        template_dir: directory with the Jinja2 templates; the bundled
            templates are used when ``None``.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.

    Example:
    ```python
    from site_parity.report.html_report import render_html
    html_path = render_html(report, None, 'reports/report.html')
    ```
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    env.filters["shorten"] = shorten
    name, context = _context(report)
    template = env.get_template(name)

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
