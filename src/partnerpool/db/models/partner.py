"""Business partner models: legal entities, sites and logistic addresses.

Hierarchy:
    LegalEntity 1 -- n Site
    LegalEntity 1 -- n LogisticAddress (every address the legal entity owns)
    Site        1 -- n LogisticAddress (addresses located at the site)

Each LegalEntity points at exactly one legal address and each Site at
exactly one main address. All other addresses are additional addresses.
"""

from enum import Enum

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from partnerpool.common.normalization import normalize_or_none

from .base import Base, ConfidenceCriteriaMixin, TimestampMixin


class AddressType(str, Enum):
    """Role an address plays for its owning legal entity or site."""

    LEGAL_ADDRESS = "LegalAddress"
    SITE_MAIN_ADDRESS = "SiteMainAddress"
    ADDITIONAL_ADDRESS = "AdditionalAddress"


class LegalForm(Base):
    """Legal form of a legal entity (GmbH, AG, ...)."""

    __tablename__ = "legal_forms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    technical_key: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    abbreviation: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<LegalForm(key={self.technical_key})>"


class IdentifierType(Base):
    """Type of a legal entity identifier (e.g. EU VAT ID, DUNS)."""

    __tablename__ = "identifier_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    technical_key: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class LegalEntityIdentifier(Base):
    """Registered identifier of a legal entity."""

    __tablename__ = "legal_entity_identifiers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    issuing_body: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type_id: Mapped[int] = mapped_column(ForeignKey("identifier_types.id"), nullable=False)
    legal_entity_id: Mapped[int] = mapped_column(
        ForeignKey("legal_entities.id", ondelete="CASCADE"), nullable=False
    )

    type: Mapped[IdentifierType] = relationship("IdentifierType", lazy="joined")
    legal_entity: Mapped["LegalEntity"] = relationship(
        "LegalEntity", back_populates="identifiers"
    )

    __table_args__ = (Index("idx_identifier_legal_entity", "legal_entity_id"),)


class LegalEntity(Base, TimestampMixin, ConfidenceCriteriaMixin):
    """Top-level registered business partner."""

    __tablename__ = "legal_entities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    bpn: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    legal_name: Mapped[str] = mapped_column(String(1024), nullable=False)
    legal_name_normalized: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    legal_form_id: Mapped[int | None] = mapped_column(
        ForeignKey("legal_forms.id"), nullable=True
    )
    legal_address_id: Mapped[int | None] = mapped_column(
        ForeignKey("logistic_addresses.id", use_alter=True, name="fk_legal_entity_legal_address"),
        nullable=True,
    )
    is_participant_data: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    legal_form: Mapped[LegalForm | None] = relationship("LegalForm")
    identifiers: Mapped[list[LegalEntityIdentifier]] = relationship(
        "LegalEntityIdentifier",
        back_populates="legal_entity",
        cascade="all, delete-orphan",
        order_by="LegalEntityIdentifier.id",
    )
    legal_address: Mapped["LogisticAddress | None"] = relationship(
        "LogisticAddress",
        foreign_keys=[legal_address_id],
        post_update=True,
    )
    sites: Mapped[list["Site"]] = relationship(
        "Site",
        back_populates="legal_entity",
        cascade="all, delete-orphan",
        order_by="Site.id",
    )
    addresses: Mapped[list["LogisticAddress"]] = relationship(
        "LogisticAddress",
        foreign_keys="LogisticAddress.legal_entity_id",
        back_populates="legal_entity",
        cascade="all, delete-orphan",
        order_by="LogisticAddress.id",
    )

    __table_args__ = (Index("idx_legal_entity_name_normalized", "legal_name_normalized"),)

    def __repr__(self) -> str:
        return f"<LegalEntity(bpn={self.bpn})>"


class Site(Base, TimestampMixin, ConfidenceCriteriaMixin):
    """Physical location belonging to a legal entity."""

    __tablename__ = "sites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    bpn: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(1024), nullable=False)
    name_normalized: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    legal_entity_id: Mapped[int] = mapped_column(
        ForeignKey("legal_entities.id", ondelete="CASCADE"), nullable=False
    )
    main_address_id: Mapped[int | None] = mapped_column(
        ForeignKey("logistic_addresses.id", use_alter=True, name="fk_site_main_address"),
        nullable=True,
    )

    # Relationships
    legal_entity: Mapped[LegalEntity] = relationship("LegalEntity", back_populates="sites")
    main_address: Mapped["LogisticAddress | None"] = relationship(
        "LogisticAddress",
        foreign_keys=[main_address_id],
        post_update=True,
    )
    addresses: Mapped[list["LogisticAddress"]] = relationship(
        "LogisticAddress",
        foreign_keys="LogisticAddress.site_id",
        back_populates="site",
        order_by="LogisticAddress.id",
    )

    __table_args__ = (
        Index("idx_site_legal_entity", "legal_entity_id"),
        Index("idx_site_name_normalized", "name_normalized"),
    )

    def __repr__(self) -> str:
        return f"<Site(bpn={self.bpn})>"


class LogisticAddress(Base, TimestampMixin, ConfidenceCriteriaMixin):
    """Postal address owned by a legal entity and optionally located at a site."""

    __tablename__ = "logistic_addresses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    bpn: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Physical postal address
    street_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    street_house_number: Mapped[str | None] = mapped_column(String(255), nullable=True)
    street_house_number_supplement: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    street_milestone: Mapped[str | None] = mapped_column(String(255), nullable=True)
    street_direction: Mapped[str | None] = mapped_column(String(255), nullable=True)
    street_name_prefix: Mapped[str | None] = mapped_column(String(255), nullable=True)
    street_additional_name_prefix: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    street_name_suffix: Mapped[str | None] = mapped_column(String(255), nullable=True)
    street_additional_name_suffix: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    postal_code: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(2), nullable=False)
    administrative_area_level1: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Derived search columns
    street_name_normalized: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city_normalized: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country_normalized: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Owning context
    legal_entity_id: Mapped[int | None] = mapped_column(
        ForeignKey("legal_entities.id", ondelete="CASCADE"), nullable=True
    )
    site_id: Mapped[int | None] = mapped_column(
        ForeignKey("sites.id", ondelete="CASCADE"), nullable=True
    )

    legal_entity: Mapped[LegalEntity | None] = relationship(
        "LegalEntity", foreign_keys=[legal_entity_id], back_populates="addresses"
    )
    site: Mapped[Site | None] = relationship(
        "Site", foreign_keys=[site_id], back_populates="addresses"
    )

    __table_args__ = (
        Index("idx_address_legal_entity", "legal_entity_id"),
        Index("idx_address_site", "site_id"),
        Index("idx_address_street_normalized", "street_name_normalized"),
        Index("idx_address_city_normalized", "city_normalized"),
    )

    @property
    def address_type(self) -> AddressType:
        """Role of this address, derived from its owning context.

        Requires ``legal_entity`` and ``site`` to be loaded.
        """
        if self.legal_entity is not None and self.legal_entity.legal_address_id == self.id:
            return AddressType.LEGAL_ADDRESS
        if self.site is not None and self.site.main_address_id == self.id:
            return AddressType.SITE_MAIN_ADDRESS
        return AddressType.ADDITIONAL_ADDRESS

    def __repr__(self) -> str:
        return f"<LogisticAddress(bpn={self.bpn})>"


# =============================================================================
# Derived column maintenance
# =============================================================================


@event.listens_for(LegalEntity, "before_insert")
@event.listens_for(LegalEntity, "before_update")
def _normalize_legal_entity(mapper, connection, target: LegalEntity) -> None:
    target.legal_name_normalized = normalize_or_none(target.legal_name)


@event.listens_for(Site, "before_insert")
@event.listens_for(Site, "before_update")
def _normalize_site(mapper, connection, target: Site) -> None:
    target.name_normalized = normalize_or_none(target.name)


@event.listens_for(LogisticAddress, "before_insert")
@event.listens_for(LogisticAddress, "before_update")
def _normalize_address(mapper, connection, target: LogisticAddress) -> None:
    target.street_name_normalized = normalize_or_none(target.street_name)
    target.city_normalized = normalize_or_none(target.city)
    target.country_normalized = normalize_or_none(target.country)
