"""Translate search requests into per-kind predicates.

Usage:
    predicate = build(request, SearchKind.SITE, UmlautStrategy.NORMALIZED)
    page = await site_repository.find_page(predicate.clause, page=0, size=10)
"""

from partnerpool.common.bpn import BpnKind
from partnerpool.config.settings import UmlautStrategy
from partnerpool.db.models.partner import LegalEntity, LogisticAddress, Site
from partnerpool.search.predicates import (
    Predicate,
    all_of,
    bpn_equals,
    text_contains,
    via_relation,
)
from partnerpool.search.types import LegalEntityPropertiesSearchRequest, SearchKind


def address_fields(
    request: LegalEntityPropertiesSearchRequest,
    strategy: UmlautStrategy = UmlautStrategy.NORMALIZED,
) -> Predicate:
    """Postal address conditions, evaluated on LogisticAddress rows.

    All conditions must hold on the same address.
    """
    return all_of(
        [
            text_contains(
                LogisticAddress.street_name,
                request.street,
                normalized_column=LogisticAddress.street_name_normalized,
                strategy=strategy,
            ),
            text_contains(LogisticAddress.postal_code, request.postal_code, strategy=strategy),
            text_contains(
                LogisticAddress.city,
                request.city,
                normalized_column=LogisticAddress.city_normalized,
                strategy=strategy,
            ),
            text_contains(
                LogisticAddress.country,
                request.country,
                normalized_column=LogisticAddress.country_normalized,
                strategy=strategy,
            ),
        ]
    )


def legal_name_matches(
    value: str | None, strategy: UmlautStrategy = UmlautStrategy.NORMALIZED
) -> Predicate:
    """Legal entity name condition."""
    return text_contains(
        LegalEntity.legal_name,
        value,
        normalized_column=LegalEntity.legal_name_normalized,
        strategy=strategy,
    )


def site_name_matches(
    value: str | None, strategy: UmlautStrategy = UmlautStrategy.NORMALIZED
) -> Predicate:
    """Site name condition."""
    return text_contains(
        Site.name, value, normalized_column=Site.name_normalized, strategy=strategy
    )


def address_name_matches(
    value: str | None, strategy: UmlautStrategy = UmlautStrategy.NORMALIZED
) -> Predicate:
    """Address name condition. Addresses have no normalized name column."""
    return text_contains(LogisticAddress.name, value, strategy=strategy)


def build(
    request: LegalEntityPropertiesSearchRequest,
    kind: SearchKind,
    strategy: UmlautStrategy = UmlautStrategy.NORMALIZED,
) -> Predicate:
    """Build the predicate selecting records of ``kind`` that match ``request``.

    Absent fields add no condition; present ones are ANDed. ``id`` is an
    exact BPN match and is always false when the BPN is malformed or names
    another kind. Legal entities and sites match address fields when any of
    their addresses does. Addresses ignore ``legal_name``.

    Args:
        request: Search request
        kind: Entity kind to select
        strategy: How umlaut spellings are reconciled

    Returns:
        Predicate over the kind's model
    """
    address = address_fields(request, strategy)

    if kind == SearchKind.LEGAL_ENTITY:
        return all_of(
            [
                bpn_equals(LegalEntity.bpn, request.id, BpnKind.LEGAL_ENTITY),
                legal_name_matches(request.legal_name, strategy),
                via_relation(LegalEntity.addresses, address),
            ]
        )

    if kind == SearchKind.SITE:
        return all_of(
            [
                bpn_equals(Site.bpn, request.id, BpnKind.SITE),
                site_name_matches(request.legal_name, strategy),
                via_relation(Site.addresses, address),
            ]
        )

    return all_of([bpn_equals(LogisticAddress.bpn, request.id, BpnKind.ADDRESS), address])
