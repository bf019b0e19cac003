"""
S3 storage — archives submitted plant photos for history.
Completely optional: when AWS_S3_BUCKET is empty, photos are
processed in-memory and not persisted.
"""

import asyncio
import logging
import mimetypes
import uuid
from datetime import datetime, timezone

import boto3

from cannaconnect.config import AWS_S3_BUCKET, AWS_REGION
from cannaconnect.models import ImageAnalysisInput
from cannaconnect.services.validation import decode_photo

logger = logging.getLogger(__name__)


def _object_key(kind: str, mime_type: str) -> str:
    ext = mimetypes.guess_extension(mime_type) or ".img"
    timestamp = datetime.now(timezone.utc).strftime("%Y/%m/%d")
    return f"scans/{kind}/{timestamp}/{uuid.uuid4().hex}{ext}"


async def archive_photo(
    photo: ImageAnalysisInput,
    kind: str,
    bucket: str = AWS_S3_BUCKET,
) -> str | None:
    """
    Upload a validated photo to S3 and return its URL.
    Returns None if S3 is not configured or the upload fails (the photo still gets analyzed).
    """
    if not bucket:
        return None

    try:
        mime_type, image_bytes = decode_photo(photo)
        key = _object_key(kind, mime_type)

        s3 = boto3.client("s3", region_name=AWS_REGION)
        # boto3 is blocking; keep it off the event loop
        await asyncio.to_thread(
            s3.put_object,
            Bucket=bucket,
            Key=key,
            Body=image_bytes,
            ContentType=mime_type,
        )
    except Exception as e:
        logger.warning("Photo archive failed (non-blocking): %s", e)
        return None

    return f"https://{bucket}.s3.{AWS_REGION}.amazonaws.com/{key}"
