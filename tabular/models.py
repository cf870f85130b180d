from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field

from .rules import DEFAULT_ALIGNMENT, DEFAULT_DELIMITER, DEFAULT_ESCAPE, DEFAULT_QUOTE


class DecodedCsv(BaseModel):
    """
    Order-preserving result of decoding CSV text with a header line.

    One single-key fragment per header, in header order, so duplicate header
    names survive. Use codec.flatten() for a plain column map.
    """

    headers: List[str] = Field(default_factory=list)
    fragments: List[Dict[str, List[str]]] = Field(default_factory=list)

    def as_sequence(self) -> List[Dict[str, Any]]:
        return [{"headers": list(self.headers)}, *[dict(f) for f in self.fragments]]


class EncodeRequest(BaseModel):
    data: Any
    delimiter: str = Field(default=DEFAULT_DELIMITER)
    quote: str = Field(default=DEFAULT_QUOTE)
    escape: str = Field(default=DEFAULT_ESCAPE)
    include_header: bool = True


class EncodeResponse(BaseModel):
    csv: str


class DecodeRequest(BaseModel):
    text: str
    delimiter: str = Field(default=DEFAULT_DELIMITER)
    with_headers: bool = True
    flat: bool = False
    rows: bool = False


class DecodeResponse(BaseModel):
    headers: Optional[List[str]] = Field(default=None, examples=[None])
    data: Union[Dict[str, List[str]], List[Dict[str, Any]], List[List[str]]]


class AlignRequest(BaseModel):
    data: Any
    alignment: str = Field(default=DEFAULT_ALIGNMENT)
    use_display_width: bool = True
    left_align_first_column: bool = True


class AlignResponse(BaseModel):
    text: str


class ExportRequest(BaseModel):
    data: Any
    format: Literal["html", "tsv"] = "html"
    include_headers: bool = True
    right_pad_first_column: bool = True
    table_id: str = ""
    css_class: str = ""
    style: str = ""


class ExportResponse(BaseModel):
    text: str


class UploadAlignResponse(BaseModel):
    text: str
    delimiter: str
    encoding: Dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    ok: bool = True
