"""Unit tests for per-kind predicate building."""

from sqlalchemy import false
from sqlalchemy.ext.asyncio import AsyncSession

from partnerpool.config.settings import UmlautStrategy
from partnerpool.db.repositories import LegalEntityRepository
from partnerpool.search.query_builder import build
from partnerpool.search.types import LegalEntityPropertiesSearchRequest, SearchKind


def render(predicate) -> str:
    return str(predicate.clause.compile(compile_kwargs={"literal_binds": True}))


class TestBuild:
    """Tests for build()."""

    def test_empty_request_has_no_condition(self):
        request = LegalEntityPropertiesSearchRequest()
        for kind in SearchKind:
            assert build(request, kind).is_empty

    def test_blank_fields_have_no_condition(self):
        request = LegalEntityPropertiesSearchRequest(legal_name="  ", city="")
        assert build(request, SearchKind.LEGAL_ENTITY).is_empty

    def test_legal_entity_bpn(self):
        request = LegalEntityPropertiesSearchRequest(id="BPNL000000000065")
        assert render(build(request, SearchKind.LEGAL_ENTITY)) == (
            "legal_entities.bpn = 'BPNL000000000065'"
        )

    def test_bpn_of_other_kind_never_matches(self):
        request = LegalEntityPropertiesSearchRequest(id="BPNL000000000065")
        assert build(request, SearchKind.SITE).clause.compare(false())
        assert build(request, SearchKind.ADDRESS).clause.compare(false())

    def test_legal_name_targets_site_name(self):
        request = LegalEntityPropertiesSearchRequest(legal_name="Werk")
        sql = render(build(request, SearchKind.SITE))
        assert "lower(sites.name) LIKE '%werk%'" in sql
        assert "sites.name_normalized LIKE '%werk%'" in sql

    def test_address_ignores_legal_name(self):
        request = LegalEntityPropertiesSearchRequest(legal_name="Müller")
        assert build(request, SearchKind.ADDRESS).is_empty

    def test_address_fields_through_relation(self):
        request = LegalEntityPropertiesSearchRequest(city="Böblingen", postal_code="710")
        sql = render(build(request, SearchKind.LEGAL_ENTITY))
        assert sql.startswith("EXISTS")
        assert "logistic_addresses.city_normalized LIKE '%boeblingen%'" in sql
        assert "lower(logistic_addresses.postal_code) LIKE '%710%'" in sql

    def test_address_fields_directly_on_address(self):
        request = LegalEntityPropertiesSearchRequest(street="Straße")
        sql = render(build(request, SearchKind.ADDRESS))
        assert "EXISTS" not in sql
        assert "logistic_addresses.street_name_normalized LIKE '%strasse%'" in sql

    def test_fields_are_combined_with_and(self):
        request = LegalEntityPropertiesSearchRequest(
            id="BPNS0000000000WN", legal_name="Werk", country="DE"
        )
        sql = render(build(request, SearchKind.SITE))
        assert sql.startswith("sites.bpn = 'BPNS0000000000WN' AND ")
        assert "EXISTS" in sql

    def test_variants_strategy(self):
        request = LegalEntityPropertiesSearchRequest(legal_name="Muelle")
        sql = render(build(request, SearchKind.LEGAL_ENTITY, UmlautStrategy.VARIANTS))
        assert "'%mülle%'" in sql
        assert "legal_name_normalized" not in sql

    def test_wrong_kind_bpn_absorbs_other_fields(self):
        request = LegalEntityPropertiesSearchRequest(id="BPNS0000000000WN", city="Böblingen")
        assert build(request, SearchKind.LEGAL_ENTITY).clause.compare(false())


class TestBuildExecuted:
    """Built predicates run against the seeded database."""

    async def test_address_field_match(self, seeded_session: AsyncSession):
        request = LegalEntityPropertiesSearchRequest(city="Böblingen")
        page = await LegalEntityRepository(seeded_session).find_page(
            build(request, SearchKind.LEGAL_ENTITY).clause, page=0, size=10
        )

        assert [le.bpn for le in page.content] == ["BPNL000000000065"]

    async def test_wrong_kind_bpn_returns_nothing(self, seeded_session: AsyncSession):
        request = LegalEntityPropertiesSearchRequest(id="BPNS0000000000WN", city="Böblingen")
        page = await LegalEntityRepository(seeded_session).find_page(
            build(request, SearchKind.LEGAL_ENTITY).clause, page=0, size=10
        )

        assert page.total_elements == 0
        assert page.content == []
