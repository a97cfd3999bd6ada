"""
Rule engine that decides whether an artifact applies to a target machine.

Every rule attached to an artifact is evaluated and the results are ANDed:
the artifact applies only when each rule is an allow rule whose conditions
all hold for the target. This is stricter than the "last matching rule wins"
reading common in launcher implementations. A rule list such as
"allow linux" + "allow windows" therefore never applies to a single concrete
machine. The literal conjunction is kept for compatibility with the rule data
this client was built against; see tests/test_rule_engine.py for the cases
that pin it down.
"""
from typing import Any, Dict, List, Optional, Sequence
import logging

from .rules import Rule, RuleAction, TargetEnvironment, parse_rules


logger = logging.getLogger(__name__)


# Per-rule outcomes
MATCHED = "MATCHED"
DENY_ACTION = "DENY_ACTION"
CONDITION_UNSUPPLIED = "CONDITION_UNSUPPLIED"
CONDITION_MISMATCH = "CONDITION_MISMATCH"

# Per-artifact outcomes
NO_RULES = "NO_RULES"
ALL_RULES_MATCHED = "ALL_RULES_MATCHED"
RULE_FAILED = "RULE_FAILED"


class RuleEngine:
    """
    Evaluates an artifact's rule list against a TargetEnvironment.

    The engine compares canonical OS names only; mapping a host platform
    identifier to one of them is the selector's job.
    """

    def is_applicable(
        self,
        rules: Optional[Sequence[Any]],
        target: TargetEnvironment
    ) -> bool:
        """
        Decide whether an artifact with these rules applies to the target.

        Args:
            rules: The artifact's rules (Rule objects or raw rule mappings),
                or None when the artifact carries no rules
            target: Environment to evaluate against

        Returns:
            True if the artifact applies

        Raises:
            MalformedRule: If a raw rule mapping has an unsupported shape
        """
        parsed = self._coerce(rules)
        if parsed is None:
            return True

        return all(self.evaluate_rule(rule, target) == MATCHED for rule in parsed)

    def evaluate_rule(self, rule: Rule, target: TargetEnvironment) -> str:
        """
        Evaluate a single rule.

        Returns:
            MATCHED, DENY_ACTION, CONDITION_UNSUPPLIED or CONDITION_MISMATCH
        """
        if rule.action is not RuleAction.ALLOW:
            return DENY_ACTION

        condition = rule.condition

        if condition.os_name is not None:
            if target.os_name is None:
                return CONDITION_UNSUPPLIED
            if condition.os_name is not target.os_name:
                return CONDITION_MISMATCH

        if condition.arch is not None:
            if target.arch is None:
                return CONDITION_UNSUPPLIED
            if condition.arch != target.arch:
                return CONDITION_MISMATCH

        if condition.os_version_pattern is not None:
            if target.os_version is None:
                return CONDITION_UNSUPPLIED
            if condition.os_version_pattern.search(target.os_version) is None:
                return CONDITION_MISMATCH

        return MATCHED

    def explain(
        self,
        rules: Optional[Sequence[Any]],
        target: TargetEnvironment,
        artifact_name: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Get a detailed account of how the decision was reached.

        Unlike is_applicable, every rule is evaluated so the trace is complete.

        Returns:
            Dictionary with the decision, an artifact-level reason code and
            the per-rule evaluation trace
        """
        parsed = self._coerce(rules)

        if parsed is None:
            return {
                'artifact': artifact_name,
                'applicable': True,
                'reason_code': NO_RULES,
                'evaluation_trace': [],
                'total_rules_evaluated': 0
            }

        trace = []
        for index, rule in enumerate(parsed):
            outcome = self.evaluate_rule(rule, target)
            trace.append({
                'index': index,
                'action': rule.action.value,
                'condition': rule.condition.to_dict(),
                'matched': outcome == MATCHED,
                'outcome': outcome
            })

        applicable = all(entry['matched'] for entry in trace)
        logger.debug(
            "Artifact %s: %d rule(s) -> %s",
            artifact_name or '<unnamed>', len(trace),
            'applicable' if applicable else 'excluded'
        )

        return {
            'artifact': artifact_name,
            'applicable': applicable,
            'reason_code': ALL_RULES_MATCHED if applicable else RULE_FAILED,
            'evaluation_trace': trace,
            'total_rules_evaluated': len(trace)
        }

    @staticmethod
    def _coerce(rules: Optional[Sequence[Any]]) -> Optional[List[Rule]]:
        if rules is None:
            return None
        if isinstance(rules, (list, tuple)) and all(isinstance(r, Rule) for r in rules):
            return list(rules)
        return parse_rules(rules)
