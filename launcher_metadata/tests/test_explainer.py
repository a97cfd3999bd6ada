"""
Tests for selection explanations.

Validates explanation generation from engine traces and templates.
"""
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from resolution import OsName, RuleEngine, SelectionExplainer, TargetEnvironment


LINUX = TargetEnvironment(os_name=OsName.LINUX)


class TestSelectionExplainer:
    """Test explanation generation."""

    def test_no_rules_explanation(self):
        result = RuleEngine().explain(None, LINUX, artifact_name="com.mojang:logging:1.1.1")

        explanation = SelectionExplainer().explain(result)

        assert "com.mojang:logging:1.1.1" in explanation
        assert "every target" in explanation

    def test_all_matched_explanation(self):
        rules = [{"action": "allow", "os": {"name": "linux"}}]
        result = RuleEngine().explain(rules, LINUX, artifact_name="lwjgl-linux")

        explanation = SelectionExplainer().explain(result)

        assert "included" in explanation
        assert "1 rule(s)" in explanation

    def test_mismatch_names_condition(self):
        rules = [{"action": "allow", "os": {"name": "windows", "arch": "x86"}}]
        result = RuleEngine().explain(rules, LINUX, artifact_name="lwjgl-x86")

        explanation = SelectionExplainer().explain(result)

        assert "excluded" in explanation
        assert "os windows and arch x86" in explanation
        assert "rule 0" in explanation

    def test_unsupplied_condition(self):
        rules = [{"action": "allow", "os": {"version": "^10\\."}}]
        result = RuleEngine().explain(rules, LINUX, artifact_name="twitch")

        explanation = SelectionExplainer().explain(result)

        assert "does not specify" in explanation
        assert "os version matching ^10\\." in explanation

    def test_deny_explained_by_first_failure(self):
        rules = [{"action": "allow"}, {"action": "deny", "os": {"name": "linux"}}]
        result = RuleEngine().explain(rules, LINUX, artifact_name="objc-bridge")

        explanation = SelectionExplainer().explain(result)

        assert "rule 1 denies os linux" in explanation

    def test_missing_template_variable_falls_back(self):
        explainer = SelectionExplainer(templates={"NO_RULES": "{artifact} {nonexistent}"})
        result = RuleEngine().explain(None, LINUX, artifact_name="lib")

        assert explainer.explain(result) == "lib is included. Reason: NO_RULES."

    def test_explain_all_keeps_order(self):
        engine = RuleEngine()
        results = [
            engine.explain(None, LINUX, artifact_name="a"),
            engine.explain([{"action": "deny"}], LINUX, artifact_name="b"),
        ]

        explanations = SelectionExplainer().explain_all(results)

        assert explanations[0].startswith("a ")
        assert explanations[1].startswith("b ")
