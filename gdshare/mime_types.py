import mimetypes
import os

DEFAULT_MIME_TYPE = "application/octet-stream"

# Types missing from (or inconsistent across) the interpreter's built-in table.
EXTRA_MIME_TYPES = {
    ".md": "text/markdown",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ".odt": "application/vnd.oasis.opendocument.text",
    ".ods": "application/vnd.oasis.opendocument.spreadsheet",
    ".odp": "application/vnd.oasis.opendocument.presentation",
    ".zip": "application/zip",
    ".gz": "application/gzip",
    ".7z": "application/x-7z-compressed",
    ".rar": "application/vnd.rar",
    ".webp": "image/webp",
    ".flac": "audio/flac",
    ".ogg": "audio/ogg",
    ".mkv": "video/x-matroska",
    ".webm": "video/webm",
}

# A private registry is built from the interpreter's defaults only, so the
# host's mime.types files never change the result.
_registry = mimetypes.MimeTypes()
for _ext, _mime_type in EXTRA_MIME_TYPES.items():
    _registry.add_type(_mime_type, _ext)


def guess_mime_type(filename) -> str:
    """Returns the MIME type for a file name based on its extension."""
    ext = os.path.splitext(str(filename))[1].lower()
    strict, common = _registry.types_map
    return strict.get(ext) or common.get(ext) or DEFAULT_MIME_TYPE
