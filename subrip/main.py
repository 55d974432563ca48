"""FastAPI service exposing SubRip parsing and retiming"""

import argparse
import logging
import time
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from . import config
from .document import SubtitleDocument, parse_srt
from .errors import SRTSyntaxError, TimecodeFormatError
from .srt_parser import SubtitleEntry
from .timecode import format_timecode, key_to_millis


@dataclass
class StoredDocument:
    """A parsed document held by the service"""

    document_id: str
    document: SubtitleDocument
    name: str = ""
    created_at: float = field(default_factory=time.time)
    last_activity: float = field(default_factory=time.time)


# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    logger.info("SubRip service starting up")
    app.state.documents: Dict[str, StoredDocument] = {}

    yield

    logger.info(f"Shutting down, dropping {len(app.state.documents)} documents")
    app.state.documents.clear()


app = FastAPI(title="SubRip Service", lifespan=lifespan)


class LoadRequest(BaseModel):
    content: str
    name: str = ""


class ShiftRequest(BaseModel):
    offset: Union[int, float, str]


class MapRequest(BaseModel):
    mapping: Dict[str, Union[int, float, str]]  # source time -> target time


class ReformatRequest(BaseModel):
    content: str


def entry_to_dict(entry: SubtitleEntry) -> dict:
    return {
        "id": entry.id,
        "appear": entry.appear,
        "disappear": entry.disappear,
        "appear_timecode": format_timecode(entry.appear),
        "disappear_timecode": format_timecode(entry.disappear),
        "text": entry.text,
    }


def describe(stored: StoredDocument) -> dict:
    return {
        "document_id": stored.document_id,
        "name": stored.name,
        "entries_count": len(stored.document),
        "created_at": stored.created_at,
        "last_activity": stored.last_activity,
    }


def get_document(document_id: str) -> Optional[StoredDocument]:
    """Get a stored document by ID, marking it active"""
    stored = app.state.documents.get(document_id)
    if stored:
        stored.last_activity = time.time()
    return stored


def not_found() -> JSONResponse:
    return JSONResponse({"status": "document_not_found"}, status_code=404)


def syntax_error_response(e: SRTSyntaxError) -> JSONResponse:
    return JSONResponse(
        {
            "status": "syntax_error",
            "error": e.info,
            "line": e.line_number,
            "column": e.column,
            "context": e.format(),
        },
        status_code=400,
    )


def timecode_error_response(e: Exception) -> JSONResponse:
    return JSONResponse({"status": "invalid_timecode", "error": str(e)}, status_code=400)


@app.get("/health")
async def health_check():
    """Health check endpoint for verifying server is ready"""
    return JSONResponse({"status": "ok", "documents_loaded": len(app.state.documents)})


@app.post("/documents")
async def load_document(req: LoadRequest):
    """Parse SRT content and keep the document for later queries"""
    if len(app.state.documents) >= config.MAX_DOCUMENTS:
        logger.warning("Document limit reached")
        return JSONResponse({"status": "at_capacity"}, status_code=503)

    try:
        document = parse_srt(req.content)
    except SRTSyntaxError as e:
        logger.warning(f"Rejected {req.name or 'document'}: {e}")
        return syntax_error_response(e)

    document_id = str(uuid.uuid4())
    app.state.documents[document_id] = StoredDocument(
        document_id=document_id, document=document, name=req.name
    )
    logger.info(f"Loaded document {document_id} ({req.name}): {len(document)} entries")

    return JSONResponse(
        {"status": "ok", "document_id": document_id, "entries_count": len(document)}
    )


@app.get("/documents")
async def list_documents():
    """List all loaded documents"""
    documents: List[dict] = [describe(s) for s in app.state.documents.values()]
    return JSONResponse({"status": "ok", "documents": documents})


@app.get("/documents/{document_id}/entries")
async def document_entries(document_id: str, at: Optional[str] = None):
    """All entries, or only those visible at the given time"""
    stored = get_document(document_id)
    if not stored:
        return not_found()

    if at is None:
        entries = stored.document.entries
    else:
        try:
            entries = stored.document.get_entries_at(key_to_millis(at))
        except TimecodeFormatError as e:
            return timecode_error_response(e)

    return JSONResponse({"status": "ok", "entries": [entry_to_dict(e) for e in entries]})


@app.post("/documents/{document_id}/shift")
async def shift_document(document_id: str, req: ShiftRequest):
    """Shift every entry of a document by a constant offset"""
    stored = get_document(document_id)
    if not stored:
        return not_found()

    try:
        stored.document.shift_time(req.offset)
    except TimecodeFormatError as e:
        return timecode_error_response(e)

    logger.info(f"Shifted document {document_id} by {req.offset}")
    return JSONResponse({"status": "ok", "entries_count": len(stored.document)})


@app.post("/documents/{document_id}/map")
async def map_document(document_id: str, req: MapRequest):
    """Retime a document through piecewise-linear control points"""
    stored = get_document(document_id)
    if not stored:
        return not_found()

    try:
        stored.document.map_time(req.mapping)
    except TimecodeFormatError as e:
        return timecode_error_response(e)

    logger.info(f"Mapped document {document_id} through {len(req.mapping)} control points")
    return JSONResponse({"status": "ok", "entries_count": len(stored.document)})


@app.get("/documents/{document_id}/srt")
async def export_document(document_id: str):
    """Serialize a document back to SRT"""
    stored = get_document(document_id)
    if not stored:
        return not_found()

    return PlainTextResponse(stored.document.to_srt(), media_type=config.MIME_TYPE)


@app.delete("/documents/{document_id}")
async def delete_document(document_id: str):
    """Drop a document"""
    logger.info(f"Delete requested for document {document_id}")
    if app.state.documents.pop(document_id, None) is None:
        return not_found()
    return JSONResponse({"status": "ok"})


@app.post("/reformat")
async def reformat(req: ReformatRequest):
    """Parse SRT content and return it in canonical form without storing it"""
    try:
        text = SubtitleDocument.reformat(req.content)
    except SRTSyntaxError as e:
        return syntax_error_response(e)
    return PlainTextResponse(text, media_type=config.MIME_TYPE)


def parse_args():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description="SubRip parsing and retiming service")
    parser.add_argument(
        "--host",
        default=config.DEFAULT_HOST,
        help=f"Host to bind to (default: {config.DEFAULT_HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.DEFAULT_PORT,
        help=f"Port to bind to (default: {config.DEFAULT_PORT})",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default=config.LOG_LEVEL,
        help=f"Log level (default: {config.LOG_LEVEL})",
    )
    return parser.parse_args()


def run():
    """Entry point for the subrip-server command"""
    args = parse_args()

    # Update log level based on args
    logging.getLogger().setLevel(args.log_level.upper())

    logger.info(f"Starting server on {args.host}:{args.port}")

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        access_log=args.log_level == "debug",
    )


if __name__ == "__main__":
    run()
