"""Contact Domain Entity

Person or organization billed by a tenant.
"""

from datetime import datetime
from typing import List, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime
from invoicing.domain.base import BaseModel, generate_uuid, utc_now


class Contact(BaseModel, table=True):
    """
    Contact - Billee of an invoice

    Domain Rules:
    - is_company decides whether company_name or first/last name is displayed
    - country defaults to CH
    """

    __tablename__ = "contacts"
    __table_args__ = (
        Index('ix_contacts_org_id', 'org_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique contact identifier (UUID)"
    )

    org_id: str = Field(description="Owning organization (tenant) ID")
    is_company: bool = Field(default=False, description="Organization rather than person")
    company_name: Optional[str] = Field(default=None)
    first_name: Optional[str] = Field(default=None)
    last_name: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)
    address_line1: Optional[str] = Field(default=None)
    address_line2: Optional[str] = Field(default=None)
    postal_code: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None)
    country: str = Field(default="CH", description="ISO 3166-1 alpha-2 country code")

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    @property
    def display_name(self) -> str:
        """Name shown on documents"""
        if self.is_company:
            return (self.company_name or "").strip()
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def address_lines(self) -> List[str]:
        """Postal address as printable lines, empty parts skipped"""
        lines = []
        if self.address_line1:
            lines.append(self.address_line1)
        if self.address_line2:
            lines.append(self.address_line2)
        locality = f"{self.postal_code or ''} {self.city or ''}".strip()
        if locality:
            lines.append(locality)
        if self.country:
            lines.append(self.country)
        return lines
