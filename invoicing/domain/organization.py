"""Organization Domain Entity

Tenant owning contacts and invoices. Billing configuration is persisted as a
loosely-typed JSON settings bag and parsed into BillingSettings on read.
"""

from datetime import datetime
from typing import Any, Dict
from sqlmodel import Field, Column
from sqlalchemy import JSON, DateTime
from invoicing.domain.base import BaseModel, generate_uuid, utc_now


class Organization(BaseModel, table=True):
    """Organization - Tenant of the invoicing service"""

    __tablename__ = "organizations"

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique organization identifier (UUID)"
    )

    name: str = Field(description="Organization display name")

    settings: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False, default=dict),
        description="Tenant settings bag (billing settings live under 'billing')"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
