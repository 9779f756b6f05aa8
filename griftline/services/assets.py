from functools import lru_cache
from typing import Iterable

import boto3
import redis

from ..config import settings
from ..models.entry_model import Entry
from .cache import get_json, presigned_url_key, set_json


@lru_cache()
def get_s3_client():
    return boto3.client(
        "s3",
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        region_name=settings.AWS_REGION,
    )


def _presigned_url(image_key: str, cache: redis.Redis) -> str:
    """
    Return a presigned S3 URL for an image key.
    Cached in Redis slightly shorter than the URL lives so an expired URL
    is never handed out.
    """
    cache_key = presigned_url_key(image_key)
    cached_url = get_json(cache, cache_key)
    if cached_url:
        return cached_url

    url = get_s3_client().generate_presigned_url(
        "get_object",
        Params={"Bucket": settings.S3_BUCKET, "Key": image_key},
        ExpiresIn=settings.CACHE_TTL,
    )
    set_json(cache, cache_key, url, max(settings.CACHE_TTL - 300, 60))
    return url


def resolve_image_url(image_key: str | None, cache: redis.Redis) -> str | None:
    if not image_key:
        return image_key
    if image_key.startswith(("http://", "https://")):
        return image_key
    if settings.CDN_BASE_URL:
        return f"{settings.CDN_BASE_URL.rstrip('/')}/{image_key.lstrip('/')}"
    if settings.S3_BUCKET:
        return _presigned_url(image_key, cache)
    return image_key


def resolve_entry_images(entries: Iterable[Entry], cache: redis.Redis) -> None:
    for entry in entries:
        if entry.image and entry.image.src:
            entry.image.src = resolve_image_url(entry.image.src, cache)
