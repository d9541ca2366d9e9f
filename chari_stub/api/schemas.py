"""Request bodies accepted by the stub.

Fields are optional at the schema level so a missing value is reported
with the stub's own 400 message instead of a generic validation error.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    phoneNumber: Optional[str] = Field(None, examples=["+212600000009"])
    firstName: Optional[str] = Field(None, examples=["Youssef"])
    lastName: Optional[str] = Field(None, examples=["Idrissi"])
    cin: Optional[str] = Field(None, examples=["GH901234"])
    walletType: Optional[str] = Field(None, max_length=1, examples=["P"])


class ConfirmRequest(BaseModel):
    phoneNumber: Optional[str] = None
    code: Optional[str] = Field(None, description="One-time code (XXXXXX)", examples=["123456"])
    walletType: Optional[str] = None


class LoginRequest(BaseModel):
    phoneNumber: Optional[str] = None
    pin: Optional[str] = Field(None, description="PIN (XXXX)", examples=["1234"])


class CreatePinRequest(BaseModel):
    phoneNumber: Optional[str] = None
    pin: Optional[str] = None


class UpdatePinRequest(BaseModel):
    phoneNumber: Optional[str] = None
    oldPin: Optional[str] = None
    newPin: Optional[str] = None


class AmountRequest(BaseModel):
    amount: Optional[Decimal] = Field(None, examples=[100])


class TransferRequest(BaseModel):
    customerPhoneNumber: Optional[str] = None
    recipientPhoneNumber: Optional[str] = None
    amount: Optional[Decimal] = Field(None, examples=[100])
    reason: Optional[str] = None


class CashRequestBody(BaseModel):
    """Cash-in/cash-out request. The Chari API spells the phone field ``PhoneNumber``."""

    PhoneNumber: Optional[str] = None
    phoneNumber: Optional[str] = None
    amount: Optional[Decimal] = Field(None, examples=[250])

    @property
    def phone(self) -> Optional[str]:
        return self.PhoneNumber or self.phoneNumber


class BeneficiaryRequest(BaseModel):
    name: Optional[str] = None
    phoneNumber: Optional[str] = None
    rib: Optional[str] = None
    email: Optional[str] = None
