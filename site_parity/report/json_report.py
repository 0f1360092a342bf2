# site_parity/report/json_report.py

"""
JSON report generation for SiteParity.

Serializes an ExtractionResult or a MigrationReport into a file.
"""
import json
from pathlib import Path
from typing import Union

from site_parity.aggregator import MigrationReport
from site_parity.models import ExtractionResult


def render_json(report: Union[ExtractionResult, MigrationReport], output_path: Path | str) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: result of ``scrape`` or ``compare``
    :param output_path: path of the JSON file
    :return: Path of the written file

    Example:
    ```python
    from site_parity.report.json_report import render_json
    report_path = render_json(report, 'reports/report.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2)

    return output
