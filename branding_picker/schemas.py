"""
Branding Picker API Schemas
Pydantic models for branding extraction and contrast request/response validation.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("branding-picker", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


# ============================================================================
# BRANDING EXTRACTION SCHEMAS
# ============================================================================

class PreviewInfo(BaseModel):
    """Caption data for one scheme preview."""
    hex: str = Field(..., pattern=HEX_PATTERN, description="Background color of the preview")
    label: str = Field(..., description="Hex plus contrast against white and black, e.g. '#abcdef (W:2.10, B:9.98)'")
    foreground: str = Field(..., pattern=HEX_PATTERN, description="Text color used on the preview")


class Previews(BaseModel):
    """Light and dark scheme previews."""
    light: PreviewInfo
    dark: PreviewInfo


class ClusterEntry(BaseModel):
    """One k-means cluster in the debug block."""
    hex: str = Field(..., pattern=HEX_PATTERN, description="Centroid color")
    count: int = Field(..., ge=0, description="Number of samples assigned to the cluster")
    saturation: float = Field(..., ge=0.0, le=1.0, description="HSL saturation of the centroid")
    score: float = Field(..., ge=0.0, description="Size and saturation score")


class BrandingDebug(BaseModel):
    """Intermediate values from the extraction pipeline."""
    width: int = Field(..., description="Decoded image width in pixels")
    height: int = Field(..., description="Decoded image height in pixels")
    sampled_pixels: int = Field(..., ge=0, description="Opaque pixels sampled")
    cluster_count: int = Field(..., ge=0, description="Number of clusters (0 when fallback used)")
    chosen_index: Optional[int] = Field(None, description="Centroid index of the primary cluster")
    iterations: int = Field(0, ge=0, description="k-means passes performed")
    clusters: List[ClusterEntry] = Field(default_factory=list)


class BrandingResponse(BaseModel):
    """Branding colors extracted from an uploaded icon."""
    request_id: str = Field(..., description="Request identifier for tracing")
    primary: str = Field(..., pattern=HEX_PATTERN, description="Dominant branded color")
    light: str = Field(..., pattern=HEX_PATTERN, description="Color for scheme_preference='light'")
    dark: str = Field(..., pattern=HEX_PATTERN, description="Color for scheme_preference='dark'")
    fallback_used: bool = Field(..., description="True when the image had no opaque pixels")
    previews: Previews
    snippet: str = Field(..., description="AppStream <branding> XML snippet")
    debug: BrandingDebug


# ============================================================================
# CONTRAST SCHEMAS
# ============================================================================

class ContrastRequest(BaseModel):
    """Two colors to compare."""
    color_a: str = Field(..., pattern=HEX_PATTERN, description="First color, #RRGGBB")
    color_b: str = Field(..., pattern=HEX_PATTERN, description="Second color, #RRGGBB")


class ContrastResponse(BaseModel):
    """WCAG contrast between two colors."""
    ratio: float = Field(..., ge=1.0, description="Contrast ratio (1.0-21.0)")
    passes_aa: bool = Field(..., description="Meets 4.5:1 for normal text")
    passes_aa_large: bool = Field(..., description="Meets 3:1 for large text")


# ============================================================================
# APPSTREAM SCHEMAS
# ============================================================================

class AppIdResponse(BaseModel):
    """Application id derived from a Flathub URL or bare id."""
    app_id: str = Field(..., description="Reverse-DNS application id")
    appstream_url: str = Field(..., description="Flathub AppStream API URL for the id")
