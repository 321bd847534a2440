"""Base model shared by all persistent domain entities"""

import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Generate a new string UUID for entity primary keys"""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Timezone-aware current UTC time for entity timestamps"""
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """Common base for SQLModel table entities"""
    pass
