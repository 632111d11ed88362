"""
label_import/api/dependencies.py

Upload dependencies for the label CSV endpoints.
"""

from __future__ import annotations

from fastapi import Depends, File, HTTPException, UploadFile, status

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Accept the upload when its name ends in ``.csv`` or its media type is a
    CSV type. Media type parameters such as ``charset`` are ignored.
    """

    filename = (file.filename or "").strip().lower()
    media_type = (file.content_type or "").split(";", 1)[0].strip().lower()

    if filename.endswith(".csv") or media_type in CSV_CONTENT_TYPES:
        return file
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Only CSV files are allowed.",
    )


def get_csv_content(file: UploadFile = Depends(get_csv_upload)) -> bytes:
    """
    Read the whole CSV upload and release its spooled file.
    """

    try:
        return file.file.read()
    finally:
        file.file.close()
