"""Request, filter and result types of the business partner search.

All models serialize with camelCase keys and accept either camelCase or
snake_case on input.
"""

from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from partnerpool.db.models.partner import AddressType

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model with camelCase wire names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchKind(str, Enum):
    """Entity kind a search hit originates from."""

    LEGAL_ENTITY = "legal_entity"
    SITE = "site"
    ADDRESS = "address"


class BusinessPartnerSearchFilterType(str, Enum):
    """Entity kinds a business partner search may return."""

    SHOW_ONLY_LEGAL_ENTITIES = "ShowOnlyLegalEntities"
    SHOW_ONLY_SITES = "ShowOnlySites"
    SHOW_ONLY_ADDITIONAL_ADDRESSES = "ShowOnlyAdditionalAddresses"


# =============================================================================
# Requests
# =============================================================================


class _BlankAsAbsent(CamelModel):
    """Treats empty and whitespace-only strings as absent."""

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def is_empty(self) -> bool:
        """True when no filter field carries a value."""
        return all(value is None for value in self.model_dump().values())


class LegalEntityPropertiesSearchRequest(_BlankAsAbsent):
    """Filter fields for the aggregated business partner search.

    ``id`` is matched exactly as a BPN of any kind. Every other field is a
    case-insensitive substring match in which ``_`` matches any single
    character.
    """

    id: str | None = None
    legal_name: str | None = None
    street: str | None = None
    postal_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("postalCode", "postcode", "postal_code"),
    )
    city: str | None = None
    country: str | None = None


class BusinessPartnerSearchRequest(_BlankAsAbsent):
    """Free-text filter for the legacy legal entity search."""

    legal_name: str | None = None


class AddressPartnerSearchRequest(_BlankAsAbsent):
    """Free-text filter for the legacy address search."""

    name: str | None = None


class PaginationRequest(CamelModel):
    """Zero-based page request."""

    page: int = Field(default=0, ge=0)
    size: int = Field(default=10, ge=1)


# =============================================================================
# Pages
# =============================================================================


class Page(CamelModel, Generic[T]):
    """One page of results plus totals across all pages."""

    total_elements: int
    total_pages: int
    page: int
    content_size: int
    content: list[T] = Field(default_factory=list)


# =============================================================================
# Result building blocks
# =============================================================================


class ConfidenceCriteria(CamelModel):
    """Provenance of a record as recorded by the write path."""

    shared_by_owner: bool | None = None
    checked_by_external_data_source: bool | None = None
    number_of_sharing_members: int | None = None
    last_confidence_check_at: datetime | None = None
    next_confidence_check_at: datetime | None = None
    confidence_level: int | None = None


class LegalForm(CamelModel):
    technical_key: str
    name: str
    abbreviation: str | None = None


class Identifier(CamelModel):
    """Registered legal entity identifier."""

    type: str
    value: str
    issuing_body: str | None = None


class Street(CamelModel):
    """Street components of a physical postal address."""

    name: str | None = None
    house_number: str | None = None
    house_number_supplement: str | None = None
    milestone: str | None = None
    direction: str | None = None
    name_prefix: str | None = None
    additional_name_prefix: str | None = None
    name_suffix: str | None = None
    additional_name_suffix: str | None = None


class PhysicalPostalAddress(CamelModel):
    street: Street = Field(default_factory=Street)
    postal_code: str | None = None
    city: str | None = None
    country: str | None = None
    administrative_area_level1: str | None = None


# =============================================================================
# Aggregated search result
# =============================================================================


class LegalEntityBlock(CamelModel):
    legal_entity_bpn: str
    legal_name: str
    legal_form: str | None = None
    confidence_criteria: ConfidenceCriteria = Field(default_factory=ConfidenceCriteria)


class SiteBlock(CamelModel):
    site_bpn: str
    name: str
    confidence_criteria: ConfidenceCriteria = Field(default_factory=ConfidenceCriteria)


class AddressBlock(CamelModel):
    address_bpn: str | None = None
    name: str | None = None
    address_type: AddressType | None = None
    physical_postal_address: PhysicalPostalAddress = Field(default_factory=PhysicalPostalAddress)
    confidence_criteria: ConfidenceCriteria = Field(default_factory=ConfidenceCriteria)


class BusinessPartnerSearchResult(CamelModel):
    """Nested business partner representation of one search hit.

    Exactly one of the blocks describes the hit itself; the others carry its
    owning legal entity and site, where resolvable.
    """

    identifiers: list[Identifier] = Field(default_factory=list)
    legal_entity: LegalEntityBlock | None = None
    site: SiteBlock | None = None
    address: AddressBlock = Field(default_factory=AddressBlock)
    is_participant_data: bool = False


class LegacyBusinessPartnerSearchResult(CamelModel):
    """Flat business partner representation of one search hit."""

    id: str
    name: str | None = None
    legal_form: LegalForm | None = None
    street: Street | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    identifiers: list[Identifier] = Field(default_factory=list)


# =============================================================================
# Single-kind match results
# =============================================================================


class LogisticAddressDetail(CamelModel):
    bpna: str
    name: str | None = None
    address_type: AddressType
    bpnl_legal_entity: str | None = None
    bpns_site: str | None = None
    physical_postal_address: PhysicalPostalAddress
    confidence_criteria: ConfidenceCriteria


class LegalEntityDetail(CamelModel):
    bpnl: str
    legal_name: str
    legal_form: LegalForm | None = None
    identifiers: list[Identifier] = Field(default_factory=list)
    is_participant_data: bool = False
    confidence_criteria: ConfidenceCriteria


class SiteDetail(CamelModel):
    bpns: str
    name: str
    bpnl_legal_entity: str
    confidence_criteria: ConfidenceCriteria


class LegalEntityMatchResult(CamelModel):
    score: float
    legal_entity: LegalEntityDetail
    legal_address: LogisticAddressDetail | None = None


class AddressMatchResult(CamelModel):
    score: float
    address: LogisticAddressDetail


class SiteMatchResult(CamelModel):
    site: SiteDetail
    main_address: LogisticAddressDetail | None = None
