"""Human-readable names and coarse categories for MIME-type formats."""

from __future__ import annotations

import re

FORMAT_DISPLAY_NAMES: dict[str, str] = {
    # ArcGIS
    "application/x-arcgis-online-service": "ArcGIS Online Service",
    "application/x-arcgis-map-service": "ArcGIS Map Service",
    "application/x-arcgis-feature-service": "ArcGIS Feature Service",
    "application/x-arcgis-image-service": "ArcGIS Image Service",
    "application/x-arcgis-layer-package": "ArcGIS Layer Package",
    "application/x-arcgis-map-package": "ArcGIS Map Package",
    "application/x-esri-shapefile": "Shapefile",
    "application/x-esri-gdb": "File Geodatabase",
    # Common GIS
    "application/vnd.google-earth.kml+xml": "KML",
    "application/vnd.google-earth.kmz": "KMZ",
    "application/geo+json": "GeoJSON",
    "application/geopackage+sqlite3": "GeoPackage",
    "application/x-geotiff": "GeoTIFF",
    # OGC web services
    "application/vnd.ogc.wms_xml": "WMS Service",
    "application/vnd.ogc.wfs_xml": "WFS Service",
    "application/vnd.ogc.wcs_xml": "WCS Service",
    "application/vnd.ogc.wmts_xml": "WMTS Service",
    # Documents
    "application/pdf": "PDF Document",
    "application/msword": "Word Document",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "Word Document",
    "application/vnd.ms-excel": "Excel Spreadsheet",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "Excel Spreadsheet",
    # Images
    "image/jpeg": "JPEG Image",
    "image/png": "PNG Image",
    "image/tiff": "TIFF Image",
    "image/gif": "GIF Image",
    # Data
    "text/csv": "CSV File",
    "application/json": "JSON",
    "application/xml": "XML",
    "text/xml": "XML",
    # Archives
    "application/zip": "ZIP Archive",
    "application/x-tar": "TAR Archive",
    "application/gzip": "GZIP Archive",
}

# Checked in order; first match wins.
_CATEGORY_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("ArcGIS", ("arcgis", "esri")),
    ("OGC Services", ("ogc", "wms", "wfs")),
    ("GIS Data", ("geo", "shapefile", "kml")),
    ("Images", ("image", "tiff", "jpeg", "png")),
    ("Documents", ("pdf", "word", "document")),
    ("Tabular Data", ("csv", "excel", "spreadsheet")),
)

_STRIP_PATTERNS = (
    re.compile(r"^application/"),
    re.compile(r"^image/"),
    re.compile(r"^text/"),
    re.compile(r"^x-"),
    re.compile(r"\+xml$"),
    re.compile(r"\+json$"),
)


def get_format_display_name(fmt: str | None) -> str:
    """Known MIME types map to a label; anything else is tidied up."""
    if not fmt:
        return "Unknown"
    known = FORMAT_DISPLAY_NAMES.get(fmt.lower())
    if known:
        return known

    cleaned = fmt
    for pattern in _STRIP_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    cleaned = cleaned.replace("-", " ").replace("_", " ")
    cleaned = " ".join(word[:1].upper() + word[1:] for word in cleaned.split(" "))
    return cleaned.strip() or "Unknown"


def get_format_category(fmt: str | None) -> str:
    if not fmt:
        return "Other"
    lowered = fmt.lower()
    for category, needles in _CATEGORY_RULES:
        if any(needle in lowered for needle in needles):
            return category
    return "Other"
