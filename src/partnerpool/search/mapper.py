"""Map ORM records to search result representations.

Every record handed to this module must have been loaded through the
partner repositories, which eagerly load the relations read here.
"""

import structlog

from partnerpool.db.models.base import ConfidenceCriteriaMixin
from partnerpool.db.models.partner import (
    AddressType,
    LegalEntity,
    LogisticAddress,
    Site,
)
from partnerpool.db.models.partner import LegalForm as LegalFormRecord
from partnerpool.search.types import (
    AddressBlock,
    AddressMatchResult,
    BusinessPartnerSearchResult,
    ConfidenceCriteria,
    Identifier,
    LegacyBusinessPartnerSearchResult,
    LegalEntityBlock,
    LegalEntityDetail,
    LegalEntityMatchResult,
    LegalForm,
    LogisticAddressDetail,
    PhysicalPostalAddress,
    SearchKind,
    SiteBlock,
    SiteDetail,
    SiteMatchResult,
    Street,
)

logger = structlog.get_logger()

Record = LegalEntity | Site | LogisticAddress


# =============================================================================
# Building blocks
# =============================================================================


def confidence_criteria(record: ConfidenceCriteriaMixin) -> ConfidenceCriteria:
    return ConfidenceCriteria(
        shared_by_owner=record.shared_by_owner,
        checked_by_external_data_source=record.checked_by_external_data_source,
        number_of_sharing_members=record.number_of_sharing_members,
        last_confidence_check_at=record.last_confidence_check_at,
        next_confidence_check_at=record.next_confidence_check_at,
        confidence_level=record.confidence_level,
    )


def street(address: LogisticAddress | None) -> Street:
    """Street components; all fields are None when there is no address."""
    if address is None:
        return Street()
    return Street(
        name=address.street_name,
        house_number=address.street_house_number,
        house_number_supplement=address.street_house_number_supplement,
        milestone=address.street_milestone,
        direction=address.street_direction,
        name_prefix=address.street_name_prefix,
        additional_name_prefix=address.street_additional_name_prefix,
        name_suffix=address.street_name_suffix,
        additional_name_suffix=address.street_additional_name_suffix,
    )


def physical_postal_address(address: LogisticAddress | None) -> PhysicalPostalAddress:
    if address is None:
        return PhysicalPostalAddress()
    return PhysicalPostalAddress(
        street=street(address),
        postal_code=address.postal_code,
        city=address.city,
        country=address.country,
        administrative_area_level1=address.administrative_area_level1,
    )


def legal_form(record: LegalFormRecord | None) -> LegalForm | None:
    if record is None:
        return None
    return LegalForm(
        technical_key=record.technical_key,
        name=record.name,
        abbreviation=record.abbreviation,
    )


def identifiers(legal_entity: LegalEntity) -> list[Identifier]:
    return [
        Identifier(
            type=identifier.type.technical_key,
            value=identifier.value,
            issuing_body=identifier.issuing_body,
        )
        for identifier in legal_entity.identifiers
    ]


def _legal_entity_block(legal_entity: LegalEntity | None) -> LegalEntityBlock | None:
    if legal_entity is None:
        return None
    return LegalEntityBlock(
        legal_entity_bpn=legal_entity.bpn,
        legal_name=legal_entity.legal_name,
        legal_form=legal_entity.legal_form.name if legal_entity.legal_form else None,
        confidence_criteria=confidence_criteria(legal_entity),
    )


def _site_block(site: Site | None) -> SiteBlock | None:
    if site is None:
        return None
    return SiteBlock(
        site_bpn=site.bpn,
        name=site.name,
        confidence_criteria=confidence_criteria(site),
    )


def _address_block(address: LogisticAddress | None, address_type: AddressType) -> AddressBlock:
    if address is None:
        return AddressBlock(address_type=address_type)
    return AddressBlock(
        address_bpn=address.bpn,
        name=address.name,
        address_type=address_type,
        physical_postal_address=physical_postal_address(address),
        confidence_criteria=confidence_criteria(address),
    )


def _warn_missing_parent(record: Record, parent: str) -> None:
    logger.warning("search_parent_missing", bpn=record.bpn, parent=parent)


# =============================================================================
# Nested (v7) results
# =============================================================================


def to_search_result(record: Record, kind: SearchKind) -> BusinessPartnerSearchResult:
    """Map a record of ``kind`` to the nested business partner result.

    Raises:
        ValueError: If ``kind`` is not a search kind
    """
    if kind == SearchKind.LEGAL_ENTITY:
        return _legal_entity_result(record)
    if kind == SearchKind.SITE:
        return _site_result(record)
    if kind == SearchKind.ADDRESS:
        return _address_result(record)
    raise ValueError(f"Unsupported search kind: {kind}")


def _legal_entity_result(legal_entity: LegalEntity) -> BusinessPartnerSearchResult:
    return BusinessPartnerSearchResult(
        identifiers=identifiers(legal_entity),
        legal_entity=_legal_entity_block(legal_entity),
        site=None,
        address=_address_block(legal_entity.legal_address, AddressType.LEGAL_ADDRESS),
        is_participant_data=legal_entity.is_participant_data,
    )


def _site_result(site: Site) -> BusinessPartnerSearchResult:
    if site.legal_entity is None:
        _warn_missing_parent(site, "legal_entity")
    return BusinessPartnerSearchResult(
        identifiers=[],
        legal_entity=_legal_entity_block(site.legal_entity),
        site=_site_block(site),
        address=_address_block(site.main_address, AddressType.SITE_MAIN_ADDRESS),
        is_participant_data=bool(site.legal_entity and site.legal_entity.is_participant_data),
    )


def _address_result(address: LogisticAddress) -> BusinessPartnerSearchResult:
    if address.legal_entity is None:
        _warn_missing_parent(address, "legal_entity")
    return BusinessPartnerSearchResult(
        identifiers=[],
        legal_entity=_legal_entity_block(address.legal_entity),
        site=_site_block(address.site),
        address=_address_block(address, address.address_type),
        is_participant_data=bool(
            address.legal_entity and address.legal_entity.is_participant_data
        ),
    )


# =============================================================================
# Flat (v6) results
# =============================================================================


def to_legacy_result(record: Record, kind: SearchKind) -> LegacyBusinessPartnerSearchResult:
    """Map a record of ``kind`` to the flat business partner result.

    Only legal entities carry a legal form and identifiers.
    """
    if kind == SearchKind.LEGAL_ENTITY:
        address = record.legal_address
        return LegacyBusinessPartnerSearchResult(
            id=record.bpn,
            name=record.legal_name,
            legal_form=legal_form(record.legal_form),
            street=street(address) if address is not None else None,
            city=address.city if address is not None else None,
            postal_code=address.postal_code if address is not None else None,
            country=address.country if address is not None else None,
            identifiers=identifiers(record),
        )

    address = record.main_address if kind == SearchKind.SITE else record
    return LegacyBusinessPartnerSearchResult(
        id=record.bpn,
        name=record.name,
        street=street(address) if address is not None else None,
        city=address.city if address is not None else None,
        postal_code=address.postal_code if address is not None else None,
        country=address.country if address is not None else None,
    )


# =============================================================================
# Single-kind match results
# =============================================================================


def to_address_detail(address: LogisticAddress) -> LogisticAddressDetail:
    return LogisticAddressDetail(
        bpna=address.bpn,
        name=address.name,
        address_type=address.address_type,
        bpnl_legal_entity=address.legal_entity.bpn if address.legal_entity else None,
        bpns_site=address.site.bpn if address.site else None,
        physical_postal_address=physical_postal_address(address),
        confidence_criteria=confidence_criteria(address),
    )


def to_legal_entity_match(legal_entity: LegalEntity, score: float) -> LegalEntityMatchResult:
    legal_address = legal_entity.legal_address
    return LegalEntityMatchResult(
        score=score,
        legal_entity=LegalEntityDetail(
            bpnl=legal_entity.bpn,
            legal_name=legal_entity.legal_name,
            legal_form=legal_form(legal_entity.legal_form),
            identifiers=identifiers(legal_entity),
            is_participant_data=legal_entity.is_participant_data,
            confidence_criteria=confidence_criteria(legal_entity),
        ),
        legal_address=to_address_detail(legal_address) if legal_address else None,
    )


def to_address_match(address: LogisticAddress, score: float) -> AddressMatchResult:
    return AddressMatchResult(score=score, address=to_address_detail(address))


def to_site_match(site: Site) -> SiteMatchResult:
    return SiteMatchResult(
        site=SiteDetail(
            bpns=site.bpn,
            name=site.name,
            bpnl_legal_entity=site.legal_entity.bpn,
            confidence_criteria=confidence_criteria(site),
        ),
        main_address=to_address_detail(site.main_address) if site.main_address else None,
    )
