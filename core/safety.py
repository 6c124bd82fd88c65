"""
PNGSort — Safety & Resource Guards
Centralized preflight checks run before any file processing.
Keeps oversized inputs and bad paths from reaching the decoder.
"""

import os
from pathlib import Path

from core.errors import PngSortError

# --- Configurable Limits ---
MAX_FILE_MB = 200          # Maximum input file size
MAX_PIXELS = 100_000_000   # Largest image (width * height) held in memory
ALLOWED_EXTENSIONS = {".png"}


class SafetyError(PngSortError):
    """Raised when a preflight check fails."""
    pass


def preflight(input_path: str, output_path: str | None = None) -> dict:
    """Run all safety checks before processing a file.

    Args:
        input_path: Path to the input PNG.
        output_path: Where the result will be written (optional).

    Returns:
        dict with file metadata (path, size_mb, extension)

    Raises:
        SafetyError: If any check fails.
        FileNotFoundError: If input doesn't exist.
    """
    input_path = str(input_path)
    real_path = os.path.realpath(input_path)

    # 1. File exists
    if not os.path.isfile(real_path):
        raise FileNotFoundError(f"Input file not found: {input_path}")

    # 2. File size check
    size_bytes = os.path.getsize(real_path)
    size_mb = size_bytes / (1024 * 1024)
    if size_mb > MAX_FILE_MB:
        raise SafetyError(
            f"Input file is {size_mb:.0f}MB, exceeds {MAX_FILE_MB}MB limit."
        )

    # 3. File extension check
    ext = Path(real_path).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise SafetyError(
            f"File type '{ext}' not allowed. "
            f"Supported: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    # 4. Output location
    if output_path:
        out_dir = os.path.dirname(os.path.abspath(str(output_path)))
        if not os.path.isdir(out_dir):
            raise SafetyError(f"Output directory does not exist: {out_dir}")

    return {
        "path": real_path,
        "size_mb": size_mb,
        "extension": ext,
    }


def validate_dimensions(width: int, height: int) -> None:
    """Check that an image is small enough to sort in memory.

    Raises:
        SafetyError: If width * height exceeds MAX_PIXELS.
    """
    if width * height > MAX_PIXELS:
        raise SafetyError(
            f"Image is {width}x{height} ({width * height} pixels), "
            f"max is {MAX_PIXELS} pixels."
        )
