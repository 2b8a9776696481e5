"""
Branding Picker v1 API Routes
Implements /v1/branding, /v1/contrast, /v1/appstream and /v1/metrics.
"""
import time
from typing import Any, Dict

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool

from branding_picker.config import config
from branding_picker.schemas import (
    AppIdResponse, BrandingDebug, BrandingResponse, ClusterEntry, ContrastRequest,
    ContrastResponse, ErrorResponse, PreviewInfo, Previews
)
from branding_picker.services.appstream import (
    appstream_api_url, build_branding_snippet, extract_app_id
)
from branding_picker.services.colors.contrast import (
    WHITE, contrast_label, contrast_ratio, passes_aa, preferred_foreground
)
from branding_picker.services.colors.extraction import BrandAnalysis, analyze_buffer
from branding_picker.services.colors.sampling import PixelBuffer
from branding_picker.services.imaging import read_image, validate_file_upload
from branding_picker.utils.ids import generate_request_id
from branding_picker.utils.logging import logger
from branding_picker.utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Branding"])

UPLOAD_ERRORS = {
    400: {"model": ErrorResponse, "description": "Oversized, corrupt or undecodable image"},
    415: {"model": ErrorResponse, "description": "Unsupported media type or extension"},
}


def build_previews(light: str, dark: str) -> Previews:
    """Preview captions; the light preview always uses white text."""
    return Previews(
        light=PreviewInfo(hex=light, label=contrast_label(light), foreground=WHITE),
        dark=PreviewInfo(
            hex=dark,
            label=contrast_label(dark),
            foreground=preferred_foreground(dark, config.CONTRAST_FOREGROUND_THRESHOLD),
        ),
    )


def build_branding_response(request_id: str, buffer: PixelBuffer,
                            analysis: BrandAnalysis) -> BrandingResponse:
    """Assemble the API response from a pipeline run."""
    result = analysis.result
    return BrandingResponse(
        request_id=request_id,
        primary=result.primary,
        light=result.light,
        dark=result.dark,
        fallback_used=analysis.fallback_used,
        previews=build_previews(result.light, result.dark),
        snippet=build_branding_snippet(result.light, result.dark),
        debug=BrandingDebug(
            width=buffer.width,
            height=buffer.height,
            sampled_pixels=analysis.sample_count,
            cluster_count=len(analysis.clusters),
            chosen_index=analysis.chosen.index if analysis.chosen else None,
            iterations=analysis.iterations,
            clusters=[
                ClusterEntry(hex=c.hex, count=c.count, saturation=c.saturation, score=c.score)
                for c in analysis.clusters
            ],
        ),
    )


@router.post("/branding",
             response_model=BrandingResponse,
             responses=UPLOAD_ERRORS,
             summary="Extract Branding Colors",
             description="Derive AppStream primary/light/dark branding colors from an icon")
async def extract_branding(
    file: UploadFile = File(..., description="Icon image (PNG, JPEG, GIF or WebP)")
) -> BrandingResponse:
    """
    Extract branding colors from an uploaded icon.

    Decodes the upload, runs the sampling/clustering/selection pipeline and
    returns the color triple, preview captions and the AppStream snippet.
    Fully transparent images yield the fixed fallback colors.
    """
    request_id = generate_request_id("brand")
    metrics = get_metrics()
    metrics.increment_request_count()
    start_time = time.time()

    logger.info("Starting branding extraction", extra={
        "request_id": request_id, "upload_filename": file.filename
    })

    try:
        validate_file_upload(file)
        buffer = await read_image(file)
    except HTTPException as e:
        metrics.increment_failure_count("unsupported" if e.status_code == 415 else "decode")
        logger.error(f"Branding extraction failed: {e.detail}",
                     extra={"request_id": request_id, "status_code": e.status_code})
        raise

    analysis = await run_in_threadpool(analyze_buffer, buffer)
    if analysis.fallback_used:
        metrics.increment_fallback_count()
        logger.warning("No opaque pixels found, returned fallback colors",
                       extra={"request_id": request_id})

    duration_ms = (time.time() - start_time) * 1000
    metrics.record_timing("extract", duration_ms)
    metrics.record_sample_count(analysis.sample_count)

    logger.info("Branding extraction complete", extra={
        "request_id": request_id,
        "ms_total": duration_ms,
        **analysis.result.as_dict()
    })

    return build_branding_response(request_id, buffer, analysis)


@router.post("/contrast",
             response_model=ContrastResponse,
             summary="Contrast Ratio",
             description="WCAG contrast ratio between two #RRGGBB colors")
def get_contrast(body: ContrastRequest) -> ContrastResponse:
    """Compute the WCAG contrast ratio of two colors."""
    ratio = contrast_ratio(body.color_a, body.color_b)
    return ContrastResponse(
        ratio=ratio,
        passes_aa=passes_aa(ratio),
        passes_aa_large=passes_aa(ratio, large_text=True),
    )


@router.get("/appstream/app-id",
            response_model=AppIdResponse,
            responses={400: {"model": ErrorResponse, "description": "No application id in input"}},
            summary="Resolve Application Id",
            description="Resolve a Flathub URL or bare id to an application id")
def resolve_app_id(
    text: str = Query(..., alias="input", description="Flathub URL or appId (e.g. org.gnome.Glade)")
) -> AppIdResponse:
    """Resolve an application id and its AppStream API URL."""
    app_id = extract_app_id(text)
    if not app_id:
        raise HTTPException(status_code=400, detail="Could not determine an application id")
    return AppIdResponse(app_id=app_id, appstream_url=appstream_api_url(app_id))


@router.get("/metrics", summary="Service Metrics")
def metrics_summary() -> Dict[str, Any]:
    """In-process request counters and timing statistics."""
    return get_metrics().get_summary()
