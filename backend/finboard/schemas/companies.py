from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    cnpj: str = Field(..., min_length=8, max_length=32)
    state: str = Field(..., min_length=2, max_length=8)

    @field_validator("state")
    @classmethod
    def upper_state(cls, v: str) -> str:
        return v.strip().upper()


class CompanyRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    cnpj: str
    state: str


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    state: Optional[str] = Field(None, min_length=2, max_length=8)
