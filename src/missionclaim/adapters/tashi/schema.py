"""Pydantic models describing the Tashi DePIN API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TashiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AccountRequest(TashiBaseModel):
    referred_by: str | None = Field(default=None, alias="referredBy")


class ChallengeResponse(TashiBaseModel):
    nonce: str
    issued_at: str = Field(alias="issuedAt")

    @field_validator("nonce", "issued_at", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class ClaimRequest(TashiBaseModel):
    wallet_id: str
    mission_id: int
