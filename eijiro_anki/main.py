import base64
import logging
from typing import Any, Dict

from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.responses import Response

from .convert import DecodeError, convert_bytes
from .models import ConvertResponse, HealthResponse
from .rules import CSV_MEDIA_TYPE, INPUT_SUFFIX

logger = logging.getLogger(__name__)

app = FastAPI(
    title="eijiro-anki",
    description="Convert Eijiro dictionary exports into Anki import CSV",
    version="0.1.0",
)


async def _convert_upload(file: UploadFile) -> Dict[str, Any]:
    if not (file.filename or "").lower().endswith(INPUT_SUFFIX):
        raise HTTPException(status_code=422, detail="Only .txt files are supported")

    raw = await file.read()
    try:
        return convert_bytes(raw)
    except DecodeError as e:
        logger.warning("rejected upload %s: %s", file.filename, e)
        raise HTTPException(status_code=422, detail="could not read file")


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/convert", response_model=ConvertResponse)
async def convert(file: UploadFile = File(...)):
    return await _convert_upload(file)


@app.post("/convert/csv")
async def convert_csv(file: UploadFile = File(...)):
    converted = (await _convert_upload(file))["csv"]
    return Response(
        content=base64.b64decode(converted["content_b64"]),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{converted["filename"]}"'},
    )
