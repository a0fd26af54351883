from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

SignalStatus = Literal["ongoing", "paused"]


class SignalCreateRequest(BaseModel):
    callback_url: Optional[str] = None
    name: Optional[str] = None
    chain: Literal["ETH", "SOL"] = "ETH"
    action: Literal["Inflow", "Outflow"] = "Inflow"
    exchanges: list[str] = Field(default_factory=lambda: ["All"])
    token_addresses: list[str] = Field(default_factory=list)
    wallet_addresses: list[str] = Field(default_factory=list)
    min_amount: Optional[str] = None
    max_amount: Optional[str] = None


class SignalUpdateRequest(BaseModel):
    name: Optional[str] = None
    callback_url: Optional[str] = None
    chain: Optional[Literal["ETH", "SOL"]] = None
    action: Optional[Literal["Inflow", "Outflow"]] = None
    exchanges: Optional[list[str]] = None
    token_addresses: Optional[list[str]] = None
    wallet_addresses: Optional[list[str]] = None
    min_amount: Optional[str] = None
    max_amount: Optional[str] = None


class SignalStatusRequest(BaseModel):
    status: SignalStatus
