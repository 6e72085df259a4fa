from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finboard.models.domain import RoleName


class RoleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: RoleName
    description: Optional[str] = None


class UserCreate(BaseModel):
    email: str  # plain str: .local domains fail EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=3)
    role: RoleName = RoleName.comercial


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: Optional[RoleRead] = None
    active: bool
    created_at: Optional[datetime] = None
