import os
import time

from werkzeug.utils import secure_filename

from errors import ValidationError

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png"}
DEFAULT_MAX_BYTES = 5 * 1024 * 1024


def _ensure_dir(path):
    os.makedirs(path, exist_ok=True)


def _stream_size(file_storage):
    stream = file_storage.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def save_image(file_storage, upload_dir, max_bytes=DEFAULT_MAX_BYTES):
    """Validate an uploaded image and write it to upload_dir.

    Returns the stored path, ``<upload_dir>/<epoch millis>-<original name>``.
    Nothing is written when validation fails.
    """
    if file_storage is None or not file_storage.filename:
        raise ValidationError("No file uploaded")

    ext = os.path.splitext(file_storage.filename)[1].lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise ValidationError("Only images are allowed")

    if _stream_size(file_storage) > max_bytes:
        raise ValidationError("File too large")

    # secure_filename drops non-ASCII characters and can eat the whole stem
    safe_name = secure_filename(file_storage.filename)
    if os.path.splitext(safe_name)[1].lower() != ext:
        safe_name = f"upload{ext}"

    _ensure_dir(upload_dir)
    filename = f"{int(time.time() * 1000)}-{safe_name}"
    path = os.path.join(upload_dir, filename)
    file_storage.save(path)
    return path


def discard(path):
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
