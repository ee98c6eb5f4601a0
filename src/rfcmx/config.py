from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional
import yaml
from pydantic import BaseModel, Field

# ---- Identifier kinds understood by the validators ----
KindName = Literal["RFC", "CURP", "NSS"]

# ---- Birth-date parsing ----
class DateConfig(BaseModel):
    permissive: bool = True  # fall back to lenient layouts when no strict layout matches
    min_year: int = 1900


# ---- Validation (century resolution, blocklist) ----
class ValidationConfig(BaseModel):
    # Two-digit years <= pivot resolve to 2000s. None = current two-digit year.
    century_pivot: Optional[int] = Field(default=None, ge=0, le=99)
    min_year: int = 1900
    check_blocklist: bool = True


# ---- Structural patterns loaded by the regex backend ----
class DetectorConfig(BaseModel):
    rfc: bool = True
    curp: bool = True
    nss: bool = True

    def enabled_kinds(self) -> list[KindName]:
        kinds: list[KindName] = []
        if self.rfc:
            kinds.append("RFC")
        if self.curp:
            kinds.append("CURP")
        if self.nss:
            kinds.append("NSS")
        return kinds


# ---- Root config ----
class RfcmxConfig(BaseModel):
    dates: DateConfig = Field(default_factory=DateConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    detectors: DetectorConfig = Field(default_factory=DetectorConfig)


# ---- Loader ----
def load_config(path: Optional[Path]) -> RfcmxConfig:
    if not path:
        return RfcmxConfig()
    data = yaml.safe_load(Path(path).read_text()) or {}
    return RfcmxConfig(**data)
