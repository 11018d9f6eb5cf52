import logging
import time
import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

logger = logging.getLogger("media")

URL_PREFIX = "/uploads"

def ensure_dir(path: str):
    Path(path).mkdir(parents=True, exist_ok=True)

def _extension(filename: Optional[str]) -> str:
    suffix = Path(filename or "").suffix.lower()
    # не доверяем имени файла клиента: только короткий алфавитно-цифровой суффикс
    if suffix and len(suffix) <= 8 and suffix[1:].isalnum():
        return suffix
    return ".jpg"

def save_upload(upload: Optional[UploadFile], out_dir: str, field: str = "image") -> Optional[str]:
    """
    Writes an uploaded file under `out_dir` with a generated name and returns
    its public path (/uploads/<name>), or None if nothing was uploaded.
    """
    if upload is None or not upload.filename:
        return None
    ensure_dir(out_dir)
    fname = f"{field}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{_extension(upload.filename)}"
    fpath = Path(out_dir) / fname
    with open(fpath, "wb") as f:
        while chunk := upload.file.read(1024 * 1024):
            f.write(chunk)
    logger.info("saved upload %s (%s)", fname, upload.content_type)
    return f"{URL_PREFIX}/{fname}"

def discard_upload(public_path: Optional[str], out_dir: str) -> None:
    """Removes a file previously returned by save_upload (used when the DB write fails)."""
    if not public_path or not public_path.startswith(URL_PREFIX + "/"):
        return
    fpath = Path(out_dir) / public_path[len(URL_PREFIX) + 1:]
    try:
        fpath.unlink()
        logger.info("discarded orphan upload %s", fpath.name)
    except FileNotFoundError:
        pass
