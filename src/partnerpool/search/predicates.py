"""Composable filter predicates over the partner tables.

A :class:`Predicate` wraps an optional SQLAlchemy boolean clause. An empty
predicate places no restriction; combining predicates with ``&`` or ``|``
skips empty operands, so callers can add one predicate per request field
without checking which fields were set.
"""

from collections.abc import Iterable

from sqlalchemy import ColumnElement, and_, false, func, or_
from sqlalchemy.orm import InstrumentedAttribute

from partnerpool.common.bpn import BpnKind, is_valid_bpn
from partnerpool.common.normalization import normalize, umlaut_variants
from partnerpool.config.settings import UmlautStrategy


class Predicate:
    """Boolean condition over one entity kind, possibly empty."""

    __slots__ = ("clause",)

    def __init__(self, clause: ColumnElement[bool] | None = None):
        self.clause = clause

    @property
    def is_empty(self) -> bool:
        return self.clause is None

    @property
    def is_false(self) -> bool:
        return self.clause is not None and self.clause.compare(false())

    def __and__(self, other: "Predicate") -> "Predicate":
        return all_of([self, other])

    def __or__(self, other: "Predicate") -> "Predicate":
        return any_of([self, other])

    def __repr__(self) -> str:
        return f"Predicate({self.clause!r})"


def empty() -> Predicate:
    """Predicate that matches every record."""
    return Predicate()


def always_false() -> Predicate:
    """Predicate that matches no record."""
    return Predicate(false())


def all_of(predicates: Iterable[Predicate]) -> Predicate:
    """AND of the non-empty predicates; any always-false operand makes the result false."""
    predicates = list(predicates)
    if any(p.is_false for p in predicates):
        return always_false()
    clauses = [p.clause for p in predicates if p.clause is not None]
    if not clauses:
        return Predicate()
    if len(clauses) == 1:
        return Predicate(clauses[0])
    return Predicate(and_(*clauses))


def any_of(predicates: Iterable[Predicate]) -> Predicate:
    """OR of the non-empty predicates; always-false operands are dropped."""
    predicates = list(predicates)
    clauses = [p.clause for p in predicates if p.clause is not None and not p.is_false]
    if not clauses and any(p.is_false for p in predicates):
        return always_false()
    if not clauses:
        return Predicate()
    if len(clauses) == 1:
        return Predicate(clauses[0])
    return Predicate(or_(*clauses))


# =============================================================================
# Field predicates
# =============================================================================


def bpn_equals(column: InstrumentedAttribute, value: str | None, kind: BpnKind) -> Predicate:
    """Exact BPN match.

    A value that is not a well-formed BPN of ``kind`` can never match a
    record of that kind, so it yields :func:`always_false`.
    """
    if value is None:
        return empty()
    if not is_valid_bpn(value, kind):
        return always_false()
    return Predicate(column == value)


def _contains(pattern: str) -> str:
    # "_" stays a LIKE single-character wildcard.
    return f"%{pattern}%"


def text_contains(
    column: InstrumentedAttribute,
    value: str | None,
    *,
    normalized_column: InstrumentedAttribute | None = None,
    strategy: UmlautStrategy = UmlautStrategy.NORMALIZED,
) -> Predicate:
    """Case-insensitive substring match with umlaut handling.

    With :attr:`UmlautStrategy.NORMALIZED` a record matches when the
    lower-cased raw column contains the lower-cased value, or when the
    normalized column contains the normalized value. With
    :attr:`UmlautStrategy.VARIANTS` it matches when the lower-cased raw
    column contains any umlaut spelling variant of the value.

    Args:
        column: Raw text column
        value: Filter value; None places no restriction
        normalized_column: Precomputed normalized column, if the field has one
        strategy: How umlaut spellings are reconciled
    """
    if value is None:
        return empty()

    lowered = func.lower(column)

    if strategy == UmlautStrategy.VARIANTS:
        variants = umlaut_variants(value.strip())
        return any_of(Predicate(lowered.like(_contains(v))) for v in variants)

    raw_match = Predicate(lowered.like(_contains(value.strip().lower())))
    if normalized_column is None:
        return raw_match
    return raw_match | Predicate(normalized_column.like(_contains(normalize(value))))


def via_relation(relation: InstrumentedAttribute, predicate: Predicate) -> Predicate:
    """Lift a predicate on related records to their owner as an EXISTS test."""
    if predicate.is_empty:
        return predicate
    if relation.property.uselist:
        return Predicate(relation.any(predicate.clause))
    return Predicate(relation.has(predicate.clause))
