"""
Explanation generator for artifact selection decisions.

Produces human-readable sentences from RuleEngine.explain() traces using
templates keyed by reason code.
"""
from typing import Dict, Any, List, Optional
import logging


logger = logging.getLogger(__name__)


class SelectionExplainer:
    """
    Generates explanations for why an artifact was selected or excluded.
    """

    DEFAULT_TEMPLATES = {
        'NO_RULES': (
            "{artifact} has no platform rules and is included for every target."
        ),
        'ALL_RULES_MATCHED': (
            "{artifact} is included: all {rule_count} rule(s) allow this target."
        ),
        'DENY_ACTION': (
            "{artifact} is excluded: rule {index} denies {condition}."
        ),
        'CONDITION_UNSUPPLIED': (
            "{artifact} is excluded: rule {index} requires {condition} "
            "but the target does not specify it."
        ),
        'CONDITION_MISMATCH': (
            "{artifact} is excluded: rule {index} requires {condition}, "
            "which the target does not match."
        ),
        'DEFAULT': (
            "{artifact}: selection decided by platform rules."
        )
    }

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        """
        Initialize explainer with templates.

        Args:
            templates: Custom templates by reason code. If None, uses defaults.
        """
        self.templates = templates or self.DEFAULT_TEMPLATES

    def explain(self, result: Dict[str, Any]) -> str:
        """
        Explain one RuleEngine.explain() result.

        An excluded artifact is explained by the first rule that failed.
        """
        values = self._prepare_values(result)
        reason_code = result.get('reason_code')

        if reason_code == 'RULE_FAILED':
            failed = self._first_failed(result)
            if failed is not None:
                reason_code = failed['outcome']
                values['index'] = str(failed['index'])
                values['condition'] = self._describe_condition(failed.get('condition', {}))

        template = self.templates.get(reason_code, self.templates.get('DEFAULT', ''))

        try:
            return template.format(**values).strip()
        except KeyError as e:
            logger.warning(
                f"Missing template variable {e} for reason code {reason_code}"
            )
            return self._create_fallback_explanation(result)

    def explain_all(self, results: List[Dict[str, Any]]) -> List[str]:
        """Explain a batch of results, in order."""
        return [self.explain(result) for result in results]

    def _prepare_values(self, result: Dict[str, Any]) -> Dict[str, str]:
        return {
            'artifact': result.get('artifact') or 'artifact',
            'rule_count': str(result.get('total_rules_evaluated', 0)),
            'index': 'unknown',
            'condition': 'any target',
        }

    @staticmethod
    def _first_failed(result: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for entry in result.get('evaluation_trace', []):
            if not entry.get('matched'):
                return entry
        return None

    @staticmethod
    def _describe_condition(condition: Dict[str, str]) -> str:
        if not condition:
            return "any target"
        parts = []
        if 'name' in condition:
            parts.append(f"os {condition['name']}")
        if 'arch' in condition:
            parts.append(f"arch {condition['arch']}")
        if 'version' in condition:
            parts.append(f"os version matching {condition['version']}")
        return " and ".join(parts)

    def _create_fallback_explanation(self, result: Dict[str, Any]) -> str:
        """Create a basic explanation when a template fails."""
        status = 'included' if result.get('applicable') else 'excluded'
        return f"{result.get('artifact') or 'artifact'} is {status}. Reason: {result.get('reason_code')}."
