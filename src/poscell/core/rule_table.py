"""Ordered, sparse rule table mapping PatternKeys to next cell states.

Lookup is first-match by key equality. A key that appears more than once is
resolved by its first occurrence; later duplicates are shadowed silently.
Keys absent from the table map to dead.
"""

import json
import numpy as np
from pathlib import Path
from typing import Any, Iterable, Iterator, List, NamedTuple, Tuple, Union
import logging

from .encoder import PatternKey

logger = logging.getLogger(__name__)


DEFAULT_STATE = False

# Reference rule set, in priority order.
REFERENCE_RULES: List[Tuple[Any, bool]] = [
    (12, False),
    (1, True),
    (4, False),
    (1 + 2j, True),
    (2j, True),
    (1 + 1j, False),
    (4j, False),
    (2 + 2j, True),
    (10 + 1j, False),
]


class Rule(NamedTuple):
    """A single (key, next_state) entry."""

    key: PatternKey
    next_state: bool


def _coerce_state(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    raise ValueError(f"Rule next state must be a boolean, got {value!r}")


class RuleTable:
    """First-match rule table with an explicit dead default."""

    def __init__(self, rules: Iterable[Union[Rule, Tuple[Any, Any]]] = ()):
        """Build and validate a rule table.

        Args:
            rules: Ordered (key, next_state) pairs; keys in any form accepted
                by PatternKey.coerce

        Raises:
            ValueError: If a rule is not a pair, or has a malformed key or state
        """
        self._rules: List[Rule] = []
        self._index: dict = {}

        for position, entry in enumerate(rules):
            try:
                raw_key, raw_state = entry
            except (TypeError, ValueError):
                raise ValueError(f"Rule #{position} must be a (key, next_state) pair, got {entry!r}") from None

            try:
                rule = Rule(PatternKey.coerce(raw_key), _coerce_state(raw_state))
            except ValueError as e:
                raise ValueError(f"Invalid rule #{position}: {e}") from e

            self._rules.append(rule)
            if rule.key in self._index:
                logger.debug(f"Rule #{position} for key {rule.key} is shadowed by an earlier rule")
            else:
                self._index[rule.key] = rule.next_state

        logger.debug(f"Built rule table with {len(self._rules)} rules ({len(self._index)} distinct keys)")

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """Rules in priority order."""
        return tuple(self._rules)

    def keys(self) -> List[PatternKey]:
        """Distinct keys in first-occurrence order."""
        return list(self._index)

    def lookup(self, key: Union[PatternKey, int, complex, str, Tuple[int, int]]) -> bool:
        """Return the next state for a key.

        The first rule whose key equals ``key`` on both axes wins; when no
        rule matches the cell is dead.
        """
        key = PatternKey.coerce(key)
        return self._index.get(key, DEFAULT_STATE)

    def __contains__(self, key: object) -> bool:
        try:
            return PatternKey.coerce(key) in self._index
        except ValueError:
            return False

    def shadowed(self) -> List[Tuple[int, Rule]]:
        """(position, rule) pairs that can never fire because of an earlier duplicate."""
        seen = set()
        result = []
        for position, rule in enumerate(self._rules):
            if rule.key in seen:
                result.append((position, rule))
            seen.add(rule.key)
        return result

    def to_list(self) -> List[List[Any]]:
        """Serialisable form: [[key_text, next_state], ...]."""
        return [[str(rule.key), rule.next_state] for rule in self._rules]

    @classmethod
    def from_list(cls, data: Any) -> 'RuleTable':
        """Build a table from the to_list form."""
        if not isinstance(data, list):
            raise ValueError(f"Rule list must be a JSON array, got {type(data).__name__}")
        return cls(data)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleTable):
            return NotImplemented
        return self._rules == other._rules

    __hash__ = None

    def __repr__(self) -> str:
        body = ", ".join(f"{rule.key}->{rule.next_state}" for rule in self._rules)
        return f"RuleTable([{body}])"


def reference_table() -> RuleTable:
    """Rule table built from REFERENCE_RULES."""
    return RuleTable(REFERENCE_RULES)


def load_rules(path: Union[str, Path]) -> RuleTable:
    """Load a rule table from a JSON file holding a list of [key, state] pairs.

    Raises:
        ValueError: If the file cannot be read or holds an invalid table
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise ValueError(f"Cannot read rules file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Rules file {path} is not valid JSON: {e}") from e

    table = RuleTable.from_list(data)
    logger.info(f"Loaded {len(table)} rules from {path}")
    return table


def save_rules(table: RuleTable, path: Union[str, Path]) -> None:
    """Write a rule table as JSON."""
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(table.to_list(), f, indent=2)
    logger.info(f"Saved {len(table)} rules to {path}")
