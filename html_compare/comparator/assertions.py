"""
Assertions Module
Test helpers that fail with a formatted report when HTML does not match.
"""

from typing import Optional

from ..core.options import HTMLCompareOptions
from ..core.structure_comparator import ComparisonResult, compare
from .report_builder import ReportBuilder


class HTMLMismatchError(AssertionError):
    """Raised by the assertion helpers; carries the comparison result."""

    def __init__(self, message: str, result: ComparisonResult):
        super().__init__(message)
        self.result = result


def assert_html_equal(left: str, right: str,
                      options: Optional[HTMLCompareOptions] = None) -> None:
    result = compare(left, right, options)
    if not result.is_match:
        raise HTMLMismatchError(ReportBuilder().format_result(result), result)


def assert_html_not_equal(left: str, right: str,
                          options: Optional[HTMLCompareOptions] = None) -> None:
    result = compare(left, right, options)
    if result.is_match:
        raise HTMLMismatchError(ReportBuilder().format_unexpected_match(result), result)
