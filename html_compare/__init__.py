r"""
HTML Compare
Compares HTML documents or fragments for equivalence, ignoring differences
that do not affect rendering.

    >>> from html_compare import compare
    >>> compare("<div><p>Hello</p></div>", "<div>\n  <p>Hello</p>\n</div>").is_match
    True
"""

from .comparator import presets
from .comparator.assertions import (HTMLMismatchError, assert_html_equal,
                                    assert_html_not_equal)
from .comparator.report_builder import ReportBuilder, format_result
from .core.html_parser import HTMLParser, parse
from .core.normalizer import Normalizer, normalize
from .core.options import HTMLCompareOptions
from .core.structure_comparator import (AttributeComparison, ComparisonResult,
                                        Mismatch, MismatchKind, PathSegment,
                                        StructureComparator, compare,
                                        html_equal)

__version__ = '0.1.0'

__all__ = [
    'AttributeComparison', 'ComparisonResult', 'HTMLCompareOptions',
    'HTMLMismatchError', 'HTMLParser', 'Mismatch', 'MismatchKind',
    'Normalizer', 'PathSegment', 'ReportBuilder', 'StructureComparator',
    'assert_html_equal', 'assert_html_not_equal', 'compare', 'format_result',
    'html_equal', 'normalize', 'parse', 'presets'
]
