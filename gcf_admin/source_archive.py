"""Packaging and upload of function source code."""
import logging
import zipfile
from pathlib import Path
from typing import Iterable, Optional

import requests

from .errors import SourceUploadError

DEFAULT_IGNORED = ('node_modules', '.git', '__pycache__', '.venv')

# Cloud Functions rejects uploads to a signed URL without this header
UPLOAD_HEADERS = {
    'Content-Type': 'application/zip',
    'x-goog-content-length-range': '0,104857600',
}


def create_source_archive(source_dir: Path, destination: Path, ignore: Iterable[str] = DEFAULT_IGNORED) -> Path:
    """
    Zip the contents of `source_dir` into `destination`.

    Paths inside the archive are relative to `source_dir`. Any file with a path
    component listed in `ignore` is skipped.

    Returns:
        The path of the created archive.
    """
    source_dir = Path(source_dir)
    if not source_dir.is_dir():
        raise FileNotFoundError(f"source directory not found: {source_dir}")

    ignored = set(ignore)
    destination = Path(destination)
    with zipfile.ZipFile(destination, 'w', zipfile.ZIP_DEFLATED) as archive:
        for path in sorted(source_dir.rglob('*')):
            relative = path.relative_to(source_dir)
            if not path.is_file() or ignored.intersection(relative.parts):
                continue
            archive.write(path, relative.as_posix())
    return destination


def upload_source_archive(upload_url: str, archive_path: Path, timeout: int = 300,
                          session: Optional[requests.Session] = None,
                          logger: Optional[logging.Logger] = None) -> None:
    """PUT a zip archive to a signed upload URL."""
    logger = logger or logging.getLogger(__name__)
    http = session or requests.Session()
    archive_path = Path(archive_path)

    logger.info(f"Uploading {archive_path.name} ({archive_path.stat().st_size} bytes)")
    try:
        with archive_path.open('rb') as data:
            response = http.put(upload_url, data=data, headers=UPLOAD_HEADERS, timeout=timeout)
    except requests.RequestException as e:
        raise SourceUploadError(f"could not upload source archive: {e}") from e

    if not response.ok:
        raise SourceUploadError(
            f"could not upload source archive: {response.status_code} - {response.text[:200]}"
        )
