"""Static wallet schemas."""

from typing import List, Optional

from pydantic import Field

from cryptocloud.schemas.base import CryptocloudRequest, CryptocloudResponse


class CreateStaticWalletRequest(CryptocloudRequest):
    """Body of a static wallet creation call."""

    currency: str = Field(..., min_length=1, description="Deposit currency code")
    description: Optional[str] = None


class StaticWallet(CryptocloudResponse):
    """Persistent deposit address issued by the gateway."""

    id: str
    currency: str
    address: str
    description: Optional[str] = None
    qr_code: Optional[str] = None
    created_at: Optional[str] = None


class ListStaticWalletsResponse(CryptocloudResponse):
    wallets: List[StaticWallet] = Field(default_factory=list)
    total: int = 0
