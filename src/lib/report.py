"""
Page report aggregation

Summarizes a PageAnalysis into totals and per-product counts, and renders
reports as JSON-ready dictionaries.
"""

from dataclasses import asdict
from typing import Any, Dict, Optional

from ..models.examples import PageAnalysis, PageReport, ProductStats
from .classifier import UNKNOWN_PRODUCT


def pageReport_build(analysis: PageAnalysis) -> PageReport:
    """
    Aggregate the code examples of a page

    Examples without a product are counted under "Unknown".
    """
    report = PageReport(
        source_path=analysis.source_path,
        rank=analysis.rank,
        content_dir=analysis.content_dir,
        error=analysis.error,
    )

    for example in analysis.code_examples:
        product = example.product or UNKNOWN_PRODUCT
        stats = report.by_product.setdefault(product, ProductStats(product=product))

        report.total_examples += 1
        stats.total_count += 1
        if example.is_input:
            report.total_input += 1
            stats.input_count += 1
        if example.is_output:
            report.total_output += 1
            stats.output_count += 1
        if example.is_tested:
            report.total_tested += 1
            stats.tested_count += 1
        if example.is_testable:
            report.total_testable += 1
            stats.testable_count += 1
        if example.is_maybe_testable:
            report.total_maybe_testable += 1
            stats.maybe_testable_count += 1

    return report


def report_toDict(report: PageReport, analysis: Optional[PageAnalysis] = None) -> Dict[str, Any]:
    """
    Render a report as a JSON-serializable dictionary

    Products are sorted by name. If the analysis is given, its individual
    code examples are included as well.
    """
    data = asdict(report)
    data["by_product"] = {
        product: asdict(report.by_product[product]) for product in sorted(report.by_product)
    }
    if analysis is not None:
        data["code_examples"] = [asdict(example) for example in analysis.code_examples]
    return data
