"""
Rule records for platform-gated artifacts.

A rule is a single allow/deny predicate over the target machine's OS name,
CPU architecture and OS version string. Rules arrive in the upstream JSON
shape:

    {"action": "allow", "os": {"name": "windows", "arch": "x86", "version": "^10\\."}}

and are parsed into frozen records so the engine only ever sees the two
actions and the three canonical OS names.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class MalformedRule(ValueError):
    """Raised when rule data does not have the allow/deny + os shape."""


class RuleAction(Enum):
    """What a rule does when it applies."""
    ALLOW = "allow"
    DENY = "deny"

    @classmethod
    def parse(cls, value: Any) -> "RuleAction":
        for action in cls:
            if action.value == value:
                return action
        raise MalformedRule(f"Unsupported rule action: {value!r}")


class OsName(Enum):
    """Canonical operating system names."""
    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"

    @classmethod
    def parse(cls, value: Any) -> "OsName":
        if isinstance(value, cls):
            return value
        # Upstream metadata spells macOS as "osx"
        if value == "osx":
            return cls.MACOS
        for name in cls:
            if name.value == value:
                return name
        raise MalformedRule(f"Unsupported OS name: {value!r}")


# Keys the upstream format nests under "os"; seeing them at the top level
# means the condition object lost its nesting.
CONDITION_KEYS = {"name", "arch", "version"}
RULE_KEYS = {"action", "os", "features"}


@dataclass(frozen=True)
class TargetEnvironment:
    """
    Description of the machine artifacts are selected for.

    Any field left as None is unknown: rules conditioned on it cannot match.
    os_name may be given as a string ("windows", "osx", ...) and is parsed
    to an OsName; an unrecognised name raises MalformedRule.
    """
    os_name: Optional[OsName] = None
    arch: Optional[str] = None
    os_version: Optional[str] = None

    def __post_init__(self):
        if self.os_name is not None and not isinstance(self.os_name, OsName):
            object.__setattr__(self, "os_name", OsName.parse(self.os_name))


@dataclass(frozen=True)
class RuleCondition:
    """Condition fields of a rule. Absent fields match any value."""
    os_name: Optional[OsName] = None
    arch: Optional[str] = None
    os_version_pattern: Optional[re.Pattern] = None

    @property
    def is_empty(self) -> bool:
        return self.os_name is None and self.arch is None and self.os_version_pattern is None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RuleCondition":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise MalformedRule(f"Rule 'os' condition must be an object, got {type(data).__name__}")

        unknown = set(data) - CONDITION_KEYS
        if unknown:
            raise MalformedRule(f"Unknown rule condition keys: {sorted(unknown)}")

        os_name = OsName.parse(data["name"]) if data.get("name") is not None else None

        arch = data.get("arch")
        if arch is not None and not isinstance(arch, str):
            raise MalformedRule(f"Rule arch must be a string, got {arch!r}")

        pattern = None
        version = data.get("version")
        if version is not None:
            if not isinstance(version, str):
                raise MalformedRule(f"Rule version pattern must be a string, got {version!r}")
            try:
                pattern = re.compile(version)
            except re.error as e:
                raise MalformedRule(f"Invalid rule version pattern {version!r}: {e}") from e

        return cls(os_name=os_name, arch=arch, os_version_pattern=pattern)

    def to_dict(self) -> Dict[str, str]:
        data = {}
        if self.os_name is not None:
            data["name"] = self.os_name.value
        if self.arch is not None:
            data["arch"] = self.arch
        if self.os_version_pattern is not None:
            data["version"] = self.os_version_pattern.pattern
        return data


@dataclass(frozen=True)
class Rule:
    """A single allow/deny predicate attached to an artifact."""
    action: RuleAction
    condition: RuleCondition = field(default_factory=RuleCondition)

    @classmethod
    def from_dict(cls, data: Any) -> "Rule":
        """
        Parse one rule in the upstream JSON shape.

        Raises:
            MalformedRule: On an unknown action, a non-object condition,
                condition fields outside the "os" object, or unknown keys.
        """
        if isinstance(data, Rule):
            return data
        if not isinstance(data, Mapping):
            raise MalformedRule(f"Rule must be an object, got {type(data).__name__}")

        misplaced = set(data) & CONDITION_KEYS
        if misplaced:
            raise MalformedRule(
                f"Rule condition fields {sorted(misplaced)} must be nested under 'os'"
            )

        unknown = set(data) - RULE_KEYS
        if unknown:
            raise MalformedRule(f"Unknown rule keys: {sorted(unknown)}")

        if "action" not in data:
            raise MalformedRule("Rule is missing 'action'")

        return cls(
            action=RuleAction.parse(data["action"]),
            condition=RuleCondition.from_dict(data.get("os")),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"action": self.action.value}
        condition = self.condition.to_dict()
        if condition:
            data["os"] = condition
        return data


def parse_rules(data: Any) -> Optional[List[Rule]]:
    """
    Parse an artifact's "rules" value.

    Returns None when the artifact carries no rules, which callers must keep
    distinct from an empty list.
    """
    if data is None:
        return None
    if not isinstance(data, (list, tuple)):
        raise MalformedRule(f"Rules must be a list, got {type(data).__name__}")
    return [Rule.from_dict(rule) for rule in data]
