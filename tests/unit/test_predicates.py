"""Unit tests for composable search predicates."""

import pytest

from sqlalchemy import false

from partnerpool.common.bpn import BpnKind
from partnerpool.config.settings import UmlautStrategy
from partnerpool.db.models.partner import LegalEntity, LogisticAddress, Site
from partnerpool.search.predicates import (
    Predicate,
    all_of,
    always_false,
    any_of,
    bpn_equals,
    empty,
    text_contains,
    via_relation,
)


def render(predicate: Predicate) -> str:
    """Render a predicate as SQL with inlined parameters."""
    return str(predicate.clause.compile(compile_kwargs={"literal_binds": True}))


class TestCombinators:
    """Tests for AND/OR composition."""

    def test_empty_matches_everything(self):
        assert empty().is_empty

    def test_all_of_skips_empty(self):
        combined = all_of([empty(), Predicate(LegalEntity.id == 1), empty()])
        assert render(combined) == "legal_entities.id = 1"

    def test_all_of_nothing_is_empty(self):
        assert all_of([empty(), empty()]).is_empty

    def test_and_operator(self):
        combined = Predicate(LegalEntity.id == 1) & Predicate(LegalEntity.bpn == "x")
        assert render(combined) == "legal_entities.id = 1 AND legal_entities.bpn = 'x'"

    def test_or_operator(self):
        combined = Predicate(LegalEntity.id == 1) | Predicate(LegalEntity.id == 2)
        assert render(combined) == "legal_entities.id = 1 OR legal_entities.id = 2"

    def test_any_of_skips_empty(self):
        assert render(any_of([empty(), Predicate(Site.id == 3)])) == "sites.id = 3"

    def test_always_false_absorbs_and(self):
        combined = always_false() & Predicate(LegalEntity.id == 1)
        assert combined.is_false
        assert combined.clause.compare(false())

    def test_always_false_dropped_from_or(self):
        combined = always_false() | Predicate(Site.id == 3)
        assert render(combined) == "sites.id = 3"

    def test_or_of_only_false_is_false(self):
        assert any_of([always_false(), empty(), always_false()]).is_false

    def test_plain_clause_is_not_false(self):
        assert not Predicate(LegalEntity.id == 1).is_false
        assert not empty().is_false


class TestBpnEquals:
    """Tests for bpn_equals()."""

    def test_absent_value(self):
        assert bpn_equals(LegalEntity.bpn, None, BpnKind.LEGAL_ENTITY).is_empty

    def test_matching_kind(self):
        predicate = bpn_equals(LegalEntity.bpn, "BPNL000000000065", BpnKind.LEGAL_ENTITY)
        assert render(predicate) == "legal_entities.bpn = 'BPNL000000000065'"

    @pytest.mark.parametrize("value", ["BPNL000065", "BPNS0000000000WN", "bpnl000000000065"])
    def test_malformed_or_other_kind_is_false(self, value: str):
        predicate = bpn_equals(LegalEntity.bpn, value, BpnKind.LEGAL_ENTITY)
        assert predicate.clause.compare(false())


class TestTextContains:
    """Tests for text_contains()."""

    def test_absent_value(self):
        assert text_contains(LegalEntity.legal_name, None).is_empty

    def test_raw_only_without_normalized_column(self):
        predicate = text_contains(LogisticAddress.postal_code, "710")
        assert render(predicate) == "lower(logistic_addresses.postal_code) LIKE '%710%'"

    def test_normalized_strategy_checks_both_columns(self):
        predicate = text_contains(
            LegalEntity.legal_name,
            "Müller",
            normalized_column=LegalEntity.legal_name_normalized,
        )
        sql = render(predicate)
        assert "lower(legal_entities.legal_name) LIKE '%müller%'" in sql
        assert "legal_entities.legal_name_normalized LIKE '%mueller%'" in sql
        assert " OR " in sql

    def test_wildcard_passes_through(self):
        predicate = text_contains(
            LogisticAddress.city, "B_blingen", normalized_column=LogisticAddress.city_normalized
        )
        assert "'%b_blingen%'" in render(predicate)

    def test_variants_strategy(self):
        predicate = text_contains(
            LegalEntity.legal_name,
            "Muelle",
            normalized_column=LegalEntity.legal_name_normalized,
            strategy=UmlautStrategy.VARIANTS,
        )
        sql = render(predicate)
        assert "lower(legal_entities.legal_name) LIKE '%muelle%'" in sql
        assert "lower(legal_entities.legal_name) LIKE '%mülle%'" in sql
        assert "legal_name_normalized" not in sql


class TestViaRelation:
    """Tests for via_relation()."""

    def test_empty_stays_empty(self):
        assert via_relation(LegalEntity.addresses, empty()).is_empty

    def test_collection_uses_exists(self):
        predicate = via_relation(
            LegalEntity.addresses, Predicate(LogisticAddress.city == "Berlin")
        )
        sql = render(predicate)
        assert sql.startswith("EXISTS")
        assert "logistic_addresses.city = 'Berlin'" in sql

    def test_many_to_one_uses_exists(self):
        predicate = via_relation(Site.legal_entity, Predicate(LegalEntity.id == 1))
        assert render(predicate).startswith("EXISTS")
