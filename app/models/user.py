from typing import Optional
from datetime import datetime, timezone
from sqlmodel import Field, SQLModel

class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # Basic Info
    name: Optional[str] = None
    email: str = Field(unique=True, index=True)
    password_hash: str

    # Account Status
    is_active: bool = Field(default=True)
    is_superuser: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
