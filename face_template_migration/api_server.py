"""FastAPI microservice exposing legacy template migration.

Run with:
  uvicorn face_template_migration.api_server:app --host 0.0.0.0 --port 8000

Endpoints:
  GET /health -> {status}
  POST /version {template: <b64>} -> {version}
  POST /convert {template: <b64>, version?: int} -> {version, vector, length}
  POST /convert/batch {templates: [<b64>], version?: int} -> {templates, count}

Templates are base64-encoded legacy template bytes. Returns JSON.
"""
from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .commons.errors import TemplateMigrationError
from .decoding.prototype import decode_base64
from .migration import FaceTemplateMigration


app = FastAPI(title="Face Template Migration API", version="1.0.0")

migration = FaceTemplateMigration()


class VersionRequest(BaseModel):
    template: str


class ConvertRequest(BaseModel):
    template: str
    version: Optional[int] = None


class BatchRequest(BaseModel):
    templates: List[str]
    version: Optional[int] = None


def _decode_template(b64: str) -> bytes:
    try:
        return decode_base64(b64)
    except TemplateMigrationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid template data: {e}")


@app.get("/health")
def health():  # pragma: no cover - trivial
    return {"status": "ok"}


@app.post("/version")
def version(req: VersionRequest):
    template = _decode_template(req.template)
    try:
        return {"version": migration.detect_version(template)}
    except TemplateMigrationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/convert")
def convert(req: ConvertRequest):
    template = _decode_template(req.template)
    try:
        if req.version is None:
            converted = migration.convert_one_any(template)
        else:
            converted = migration.convert(template, req.version)
    except TemplateMigrationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return converted.to_dict()


@app.post("/convert/batch")
def convert_batch(req: BatchRequest):
    templates = [_decode_template(t) for t in req.templates]
    try:
        if req.version is None:
            converted = migration.convert_any(templates)
        else:
            converted = migration.convert_by_version(templates, req.version)
    except TemplateMigrationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    rows = [c.to_dict() for c in converted]
    return {"templates": rows, "count": len(rows)}
