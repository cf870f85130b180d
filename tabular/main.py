from typing import Optional

from fastapi import FastAPI, UploadFile, File, HTTPException, Request
from fastapi.responses import JSONResponse

from .align import RenderOptions, align_csv_text, align_structure
from .codec import decode_csv, decoded_to_rows, encode_csv, flatten
from .errors import TabularError
from .export import to_html_table, to_padded_tsv
from .ingest import decode_upload, sniff_delimiter
from .log import get_logger
from .models import (
    AlignRequest,
    AlignResponse,
    DecodeRequest,
    DecodeResponse,
    EncodeRequest,
    EncodeResponse,
    ExportRequest,
    ExportResponse,
    HealthResponse,
    UploadAlignResponse,
)
from .rules import DEFAULT_ALIGNMENT

logger = get_logger()

app = FastAPI(
    title="tabular-align",
    description="CSV encoding/decoding, column-aligned text rendering and HTML/TSV export",
    version="0.1.0",
)


@app.exception_handler(TabularError)
async def tabular_error_handler(request: Request, exc: TabularError):
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/encode", response_model=EncodeResponse)
def encode(body: EncodeRequest):
    text = encode_csv(
        body.data,
        delimiter=body.delimiter,
        quote=body.quote,
        escape=body.escape,
        include_header=body.include_header,
    )
    return {"csv": text}


@app.post("/decode", response_model=DecodeResponse)
def decode(body: DecodeRequest):
    if not body.with_headers:
        return {"data": decode_csv(body.text, delimiter=body.delimiter, with_headers=False)}

    decoded = decode_csv(body.text, delimiter=body.delimiter, with_headers=True)
    if body.flat:
        return {"headers": decoded.headers, "data": flatten(decoded)}
    if body.rows:
        return {"headers": decoded.headers, "data": decoded_to_rows(decoded)}
    return {"headers": decoded.headers, "data": decoded.as_sequence()}


@app.post("/align", response_model=AlignResponse)
def align(body: AlignRequest):
    text = align_structure(
        body.data,
        alignment=body.alignment,
        use_display_width=body.use_display_width,
        left_align_first_column=body.left_align_first_column,
    )
    return {"text": text}


@app.post("/export", response_model=ExportResponse)
def export(body: ExportRequest):
    if body.format == "tsv":
        text = to_padded_tsv(
            body.data,
            include_headers=body.include_headers,
            right_pad_first_column=body.right_pad_first_column,
        )
    else:
        text = to_html_table(body.data, table_id=body.table_id, css_class=body.css_class, style=body.style)
    return {"text": text}


@app.post("/align/csv", response_model=UploadAlignResponse)
async def align_csv_upload(
    file: UploadFile = File(...),
    delimiter: Optional[str] = None,
    alignment: str = DEFAULT_ALIGNMENT,
    use_display_width: bool = True,
    left_align_first_column: bool = True,
):
    if not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    text, encoding_report = decode_upload(raw)
    delimiter = delimiter or sniff_delimiter(text)

    options = RenderOptions(
        delimiter=delimiter,
        alignment=alignment,
        use_display_width=use_display_width,
        left_align_first_column=left_align_first_column,
    )
    return {
        "text": align_csv_text(text, options),
        "delimiter": delimiter,
        "encoding": encoding_report,
    }
