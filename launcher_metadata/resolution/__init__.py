"""
Platform-rule resolution layer.

Decides which dependency artifacts of a version apply to a target machine
by evaluating each artifact's allow/deny rules.
"""
from .rules import (
    MalformedRule,
    OsName,
    Rule,
    RuleAction,
    RuleCondition,
    TargetEnvironment,
    parse_rules,
)
from .artifacts import ArtifactEntry, DownloadInfo
from .rule_engine import RuleEngine
from .platform import canonical_arch, canonical_os_name, host_environment
from .selector import ArtifactSelector
from .explainer import SelectionExplainer


__all__ = [
    'MalformedRule',
    'OsName',
    'Rule',
    'RuleAction',
    'RuleCondition',
    'TargetEnvironment',
    'parse_rules',
    'ArtifactEntry',
    'DownloadInfo',
    'RuleEngine',
    'canonical_arch',
    'canonical_os_name',
    'host_environment',
    'ArtifactSelector',
    'SelectionExplainer',
]
