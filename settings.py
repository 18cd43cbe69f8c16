import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from errors import SplitError, SplitException

# Runtime settings
BASE_DIR = Path(os.getenv("SPLITPDF_BASE_DIR", Path(__file__).resolve().parent))
DEFAULT_OUT_DIR = BASE_DIR / "out"
LOG_LEVEL = os.getenv("SPLITPDF_LOG_LEVEL", "WARNING").upper()
HOST = os.getenv("SPLITPDF_HOST", "0.0.0.0")
PORT = int(os.getenv("SPLITPDF_PORT", "8000"))
# Every path the HTTP surface reads or writes must stay under this folder
API_ROOT = Path(os.getenv("SPLITPDF_API_ROOT", BASE_DIR))

# Placeholder delimiter used in output masks, e.g. %%%client%%%
SENTINEL = "%%%"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _meta_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, (str, int, float)):
        return str(value)
    return json.dumps(value)


class SplitDoc(BaseModel):
    """One source document and its invoice/depth page ranges."""
    model_config = ConfigDict(populate_by_name=True)

    input_file: Optional[str] = Field(None, alias="inputFile")
    from_invoice: int = Field(0, alias="fromInvoice")
    to_invoice: int = Field(0, alias="toInvoice")
    from_depth: int = Field(0, alias="fromDepth")
    to_depth: int = Field(0, alias="toDepth")
    metakeys: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("metakeys")
    @classmethod
    def _unique_keys(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        seen = set()
        for key in value:
            if key.casefold() in seen:
                raise ValueError(f"duplicate metakey {key!r}")
            seen.add(key.casefold())
        return value

    @property
    def invoice_range(self) -> tuple:
        return self.from_invoice, self.to_invoice

    @property
    def depth_range(self) -> tuple:
        return self.from_depth, self.to_depth

    def metadata(self) -> Dict[str, str]:
        return {key: _meta_str(value) for key, value in self.metakeys.items()}


class SplitConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    split_inv_name: Optional[str] = Field(None, alias="splitInvName")
    split_depth_name: Optional[str] = Field(None, alias="splitDepthName")
    out_folder: Optional[str] = Field(None, alias="outFolder")
    split_docs: List[SplitDoc] = Field(alias="splitDocs")

    def output_dir(self) -> Path:
        if is_blank(self.out_folder):
            return DEFAULT_OUT_DIR
        return Path(self.out_folder)


def parse_config(data: Any) -> SplitConfig:
    """Validate already-decoded JSON as a split configuration."""
    try:
        return SplitConfig.model_validate(data)
    except ValidationError as e:
        raise SplitException(SplitError.InvalidConf, str(e)) from e


def load_config(path) -> SplitConfig:
    """
    Read a split configuration from a JSON file.

    Raises SplitException with ConfNotFound when the file is absent and
    InvalidConf when it cannot be read or does not describe a configuration.
    """
    try:
        with open(path, "r", encoding="utf-8-sig") as infile:
            data = json.load(infile)
    except FileNotFoundError as e:
        raise SplitException(SplitError.ConfNotFound, str(path)) from e
    except (OSError, ValueError) as e:
        raise SplitException(SplitError.InvalidConf, str(e)) from e

    return parse_config(data)
