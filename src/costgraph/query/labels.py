# src/costgraph/query/labels.py
"""
Compiles a label mapping (key -> acceptable values) into a DQL filter over
label nodes. A label node carries the predicates ``key`` and ``value``.

Within a key the values are OR-ed; across keys the clauses are AND-ed.
Every key and value is bound to a query variable, so no caller text is
ever spliced into the query.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Tuple

from ..core.exceptions import InvalidLabelFilterError

# Dgraph never assigns uid 0x0, so this filter selects no node.
MATCH_NOTHING = "uid(0x0)"


@dataclass(frozen=True)
class LabelFilter:
    """A compiled label filter: one clause per label key plus its variables."""

    clauses: Tuple[str, ...] = ()
    variables: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def match_nothing(cls) -> "LabelFilter":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.clauses

    @property
    def expression(self) -> str:
        if self.is_empty:
            return MATCH_NOTHING
        return " AND ".join(self.clauses)


def _values_of(key: str, values) -> List[str]:
    if isinstance(values, str):
        values = [values]
    if not isinstance(values, Iterable):
        raise InvalidLabelFilterError(f"Values for label '{key}' must be a collection of strings")
    result = []
    for value in values:
        if not isinstance(value, str):
            raise InvalidLabelFilterError(f"Label value {value!r} for key '{key}' is not a string")
        result.append(value)
    # Sorted so that enumeration order never changes the generated text.
    return sorted(set(result))


def compile_label_filter(labels: Mapping[str, Iterable[str]]) -> LabelFilter:
    """
    Compile ``labels`` into a :class:`LabelFilter`.

    An empty mapping, or a key with no acceptable value, yields a filter that
    matches nothing rather than everything.
    """
    if not labels:
        return LabelFilter.match_nothing()

    for key in labels:
        if not isinstance(key, str) or not key:
            raise InvalidLabelFilterError(f"Label key {key!r} must be a non-empty string")

    clauses: List[str] = []
    variables: Dict[str, str] = {}
    for index, key in enumerate(sorted(labels)):
        values = _values_of(key, labels[key])
        if not values:
            return LabelFilter.match_nothing()

        key_var = f"$lk{index}"
        variables[key_var] = key
        alternatives = []
        for position, value in enumerate(values):
            value_var = f"$lv{index}_{position}"
            variables[value_var] = value
            alternatives.append(f"eq(value, {value_var})")
        clauses.append(f"(eq(key, {key_var}) AND ({' OR '.join(alternatives)}))")

    return LabelFilter(clauses=tuple(clauses), variables=variables)
