"""Pydantic schemas used across the project."""
from decimal import Decimal
from typing import Annotated, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from app.domain.sweeps import BalanceReport, BatchResponse, TransferResult

# Fixed-point text, never exponent notation such as 5E-9.
Amount = Annotated[Decimal, PlainSerializer(lambda value: format(value, "f"), return_type=str, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenData(BaseModel):
    subject: str
    role: str


class AccountRequest(BaseModel):
    account: str = Field(..., min_length=1, validation_alias=AliasChoices("account", "publicKey"))


class TokenBalanceResponse(CamelModel):
    asset_id: str
    amount: Amount


class BalanceResponse(CamelModel):
    native: Amount
    tokens: list[TokenBalanceResponse] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: BalanceReport) -> "BalanceResponse":
        return cls(
            native=report.native.display_amount,
            tokens=[
                TokenBalanceResponse(asset_id=balance.asset.asset_id, amount=balance.display_amount)
                for balance in report.tokens
            ],
        )


class ConnectResponse(CamelModel):
    success: bool = True
    balance: BalanceResponse


class TransferResultResponse(CamelModel):
    asset_kind: Literal["native", "fungible"]
    asset_id: str
    status: Literal["success", "failed"]
    signature_or_error: str

    @classmethod
    def from_result(cls, result: TransferResult) -> "TransferResultResponse":
        return cls(
            asset_kind=result.asset.kind,
            asset_id=result.asset.asset_id,
            status=result.status,
            signature_or_error=result.signature_or_error,
        )


class TransferResponse(CamelModel):
    success: bool
    results: list[TransferResultResponse] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def from_batch(cls, batch: BatchResponse) -> "TransferResponse":
        return cls(
            success=batch.overall_success,
            results=[TransferResultResponse.from_result(result) for result in batch.results],
            error=batch.error,
        )


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str = "healthy"
