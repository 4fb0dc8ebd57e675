"""
Report Builder Module
Turns comparison results into human-readable messages using Jinja2 templates.
"""

import json
import logging

from jinja2 import Environment, PackageLoader, StrictUndefined

from ..core.structure_comparator import ComparisonResult

logger = logging.getLogger(__name__)


class ReportBuilder:
    def __init__(self):
        self.env = Environment(
            loader=PackageLoader('html_compare', 'templates'),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined
        )

    def format_result(self, result: ComparisonResult) -> str:
        """Render the failure message for a mismatch; a match renders nothing."""
        if result.is_match:
            return ''
        return self._render('mismatch.txt.j2', result, mismatch=result.mismatch)

    def format_unexpected_match(self, result: ComparisonResult) -> str:
        """Render the message for inputs that compared equal when they should not."""
        return self._render('unexpected_match.txt.j2', result)

    def build_json(self, result: ComparisonResult) -> str:
        """Generate a JSON report with the raw comparison data."""
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)

    def _render(self, template_name: str, result: ComparisonResult, **context) -> str:
        try:
            template = self.env.get_template(template_name)
            return template.render(result=result, options=result.options.to_dict(), **context)
        except Exception as e:
            logger.error(f"Error rendering report {template_name}: {str(e)}", exc_info=True)
            raise


def format_result(result: ComparisonResult) -> str:
    return ReportBuilder().format_result(result)
