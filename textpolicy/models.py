from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field

from .rules import LOCALE, MAX_STACKLEVEL


class Unspecified(BaseModel):
    kind: Literal["unspecified"] = "unspecified"

    @property
    def token(self) -> Optional[str]:
        return None


class Locale(BaseModel):
    kind: Literal["locale"] = "locale"

    @property
    def token(self) -> Optional[str]:
        return LOCALE


class Named(BaseModel):
    kind: Literal["named"] = "named"
    codec: str

    @property
    def token(self) -> Optional[str]:
        return self.codec


EncodingSpec = Annotated[Union[Unspecified, Locale, Named], Field(discriminator="kind")]


def classify(value: Optional[str]) -> EncodingSpec:
    """Map a raw ``encoding`` argument onto the tagged variant."""
    if value is None:
        return Unspecified()
    if value == LOCALE:
        return Locale()
    return Named(codec=value)


class DiagnosticEvent(BaseModel):
    message: str
    category: str = Field(examples=["PendingDeprecationWarning"])
    stacklevel: Optional[int] = None
    filename: Optional[str] = None
    lineno: Optional[int] = None


class ResolveRequest(BaseModel):
    encoding: Optional[str] = Field(default=None, examples=[None, "locale", "utf-8"])
    stacklevel: int = Field(default=1, ge=1, le=MAX_STACKLEVEL)


class ResolveResponse(BaseModel):
    encoding: str
    requested: EncodingSpec
    dev_mode: bool
    diagnostics: List[DiagnosticEvent] = Field(default_factory=list)


class AuditReport(BaseModel):
    requested: EncodingSpec
    effective_encoding: str
    decoded_strictly: bool
    future_default: str
    decodes_as_future_default: bool
    detected_encoding: Optional[str] = None
    default_change_affects: bool = False
    diagnostics: List[DiagnosticEvent] = Field(default_factory=list)


class AuditResponse(BaseModel):
    sha256: str
    size: int
    report: AuditReport


class HealthResponse(BaseModel):
    ok: bool = True
