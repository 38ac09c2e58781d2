"""
Dot Simplifier Web Application.

A FastAPI web server that turns uploaded SVG files into connect-the-dots
coordinates, and lets an editor round-trip hand-edited coordinate text.
"""

import asyncio
import io
import json
import logging
import zipfile
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from .config import settings
from .converter import document_to_dxf, document_to_svg
from .coordinates import parse_document, serialize_document
from .models import (
    CoordinatesRequest,
    DocumentResponse,
    EditRequest,
    HealthResponse,
    ProcessRequest,
    ProcessResponse,
    SimplifyOptions,
)
from .pipeline import process_svg_async, process_svg_bytes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Dot Simplifier",
    description="Turn SVG shapes into simplified connect-the-dots coordinates",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Stats"],
)


def _build_options(epsilon: Optional[float], min_distance: Optional[float],
                   should_resize: Optional[bool]) -> SimplifyOptions:
    values = {
        "epsilon": epsilon,
        "min_distance": min_distance,
        "should_resize": should_resize,
    }
    try:
        return SimplifyOptions(**{k: v for k, v in values.items() if v is not None})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse()


@app.post("/process", response_model=ProcessResponse)
async def process(req: ProcessRequest) -> ProcessResponse:
    """Convert raw SVG code into coordinate text."""
    try:
        text, stats = await process_svg_async(req.svg, req.options)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ProcessResponse(text=text, stats=stats)


@app.post("/simplify")
async def simplify_file(
    file: UploadFile = File(...),
    epsilon: Optional[float] = Form(None),
    min_distance: Optional[float] = Form(None),
    should_resize: Optional[bool] = Form(None),
):
    """
    Simplify an uploaded SVG file.

    Returns a ZIP file containing the coordinate text plus DXF and SVG
    versions of the simplified shapes.
    """
    # Validate file extension
    filename = file.filename or "unknown"
    ext = Path(filename).suffix.lower()

    if ext != '.svg':
        raise HTTPException(
            status_code=400,
            detail="Unsupported file format. Please upload a .svg file."
        )

    options = _build_options(epsilon, min_distance, should_resize)

    # Read file content
    content = await file.read()

    if not content:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Uploaded file is too large.")

    try:
        document, text, stats = await asyncio.to_thread(process_svg_bytes, content, options)
        dots_dxf = document_to_dxf(document)
        dots_svg = document_to_svg(document)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Failed to process %s", filename)
        raise HTTPException(
            status_code=500,
            detail=f"Error processing file: {str(e)}"
        )

    # Create ZIP file
    zip_buffer = io.BytesIO()
    base_name = Path(filename).stem

    with zipfile.ZipFile(zip_buffer, 'w', zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(f"{base_name}_dots.txt", text)
        zf.writestr(f"{base_name}_dots.dxf", dots_dxf)
        zf.writestr(f"{base_name}_dots.svg", dots_svg)

    zip_buffer.seek(0)

    # Return ZIP file with stats in header
    headers = {
        "Content-Disposition": f'attachment; filename="{base_name}_dots.zip"',
        "X-Stats": json.dumps(stats)
    }

    return StreamingResponse(
        zip_buffer,
        media_type="application/zip",
        headers=headers
    )


@app.post("/coordinates/parse", response_model=DocumentResponse)
async def parse_coordinates(req: CoordinatesRequest) -> DocumentResponse:
    """Read (possibly hand-edited) coordinate text; never fails on bad text."""
    document = parse_document(req.text)
    return DocumentResponse.from_document(document, serialize_document(document))


@app.post("/coordinates/edit", response_model=DocumentResponse)
async def edit_coordinates(req: EditRequest) -> DocumentResponse:
    """Apply one structural edit and return the re-serialized text."""
    document = parse_document(req.text)
    try:
        updated = req.operation.apply(document)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DocumentResponse.from_document(updated, serialize_document(updated))


def main():
    """Run the application with uvicorn."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
