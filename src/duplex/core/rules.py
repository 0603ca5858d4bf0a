"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/rules.py
Marking rules that select files for deletion.

A rule is either an exact path or a case-insensitive regular expression that
is searched for anywhere in the path. Rules keep their insertion order, which
is also the 1-based numbering shown to the operator.
"""

import os
import re
from dataclasses import dataclass, field
from typing import List, Union
from duplex.core.models import File
from duplex.core.errors import RuleError


@dataclass(frozen=True)
class PathRule:
    path: str

    def matches(self, file: File) -> bool:
        return file.path == self.path

    def __str__(self):
        return f"path:  {self.path}"


@dataclass(frozen=True)
class PatternRule:
    text: str
    regex: re.Pattern = field(compare=False, repr=False)

    @classmethod
    def compile(cls, text: str) -> "PatternRule":
        try:
            return cls(text=text, regex=re.compile(text, re.IGNORECASE))
        except re.error as e:
            raise RuleError(f"Invalid regular expression: {text} ({e})") from e

    def matches(self, file: File) -> bool:
        return self.regex.search(file.path) is not None

    def __str__(self):
        return f"regex: {self.text}"


Rule = Union[PathRule, PatternRule]


class RuleSet:
    """
    Ordered collection of rules. A file is a match when any rule matches it.
    """

    def __init__(self):
        self._rules: List[Rule] = []

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)

    @property
    def rule_count(self) -> int:
        return len(self._rules)

    def add_path_rule(self, path: str) -> PathRule:
        if not path:
            raise RuleError("Missing rule argument")
        rule = PathRule(os.path.normpath(path))
        if rule in self._rules:
            raise RuleError(f"Rule already exists: {rule.path}")
        self._rules.append(rule)
        return rule

    def add_pattern_rule(self, text: str) -> PatternRule:
        if not text:
            raise RuleError("Missing rule argument")
        if any(isinstance(r, PatternRule) and r.text == text for r in self._rules):
            raise RuleError(f"Rule already exists: {text}")
        rule = PatternRule.compile(text)
        self._rules.append(rule)
        return rule

    def remove_rule(self, index: int) -> Rule:
        """Removes the rule at a 1-based index."""
        if index < 1 or index > len(self._rules):
            raise RuleError(f"Index must be between 1 and {len(self._rules)}")
        return self._rules.pop(index - 1)

    def is_match(self, file: File) -> bool:
        return any(rule.matches(file) for rule in self._rules)

    def clear(self) -> None:
        self._rules.clear()

    def rules_for_display(self) -> List[str]:
        return [str(rule) for rule in self._rules]
