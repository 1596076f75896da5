"""
CDN URL rewriting.

Download URLs are signed against the storage endpoint; when a CDN fronts the
bucket, the storage origin is swapped for the CDN origin. Two layouts exist:

- bucket included (default): the CDN mirrors the whole endpoint, so
  https://storage/bucket/key becomes https://cdn/bucket/key
- bucket excluded: the CDN is scoped to one bucket (e.g. an R2 custom
  domain), so https://storage/bucket/key becomes https://cdn/key

URLs that do not start with the expected origin are returned unchanged.
"""
from functools import partial
from typing import Callable, Optional
from urllib.parse import urlsplit, urlunsplit

from resource_access.config import Settings


def _prefix_path(endpoint_path: str, bucket: Optional[str]) -> str:
    path = endpoint_path.rstrip("/")
    if bucket:
        path = f"{path}/{bucket.strip('/')}"
    return path


def _strip_prefix(path: str, prefix: str) -> Optional[str]:
    """Remainder of `path` after `prefix`, or None when `prefix` does not start it."""
    if not prefix:
        return path
    if path == prefix:
        return ""
    if path.startswith(prefix + "/"):
        return path[len(prefix):]
    return None


def rewrite_to_cdn_url(
    url: str,
    *,
    storage_endpoint: Optional[str],
    cdn_endpoint: Optional[str],
    bucket: Optional[str] = None,
    exclude_bucket: bool = False
) -> str:
    """
    Replace the storage origin of `url` with the CDN origin.
    
    Matching is done on parsed components: scheme and host must equal the
    storage endpoint's, and the path must begin with the endpoint path (plus
    the bucket segment when `exclude_bucket` is set) on a segment boundary.
    Query string and fragment are carried over verbatim, so signatures survive.
    
    Args:
        url: Storage-origin URL
        storage_endpoint: Base URL of the storage service
        cdn_endpoint: Base URL of the CDN
        bucket: Bucket the CDN is scoped to (used when exclude_bucket is set)
        exclude_bucket: Drop the bucket segment from the rewritten path
        
    Returns:
        Rewritten URL, or `url` unchanged when it does not match
    """
    if not storage_endpoint or not cdn_endpoint:
        return url
    if exclude_bucket and not bucket:
        return url
    
    source = urlsplit(url)
    origin = urlsplit(storage_endpoint)
    if source.scheme.lower() != origin.scheme.lower():
        return url
    if source.netloc.lower() != origin.netloc.lower():
        return url
    
    prefix = _prefix_path(origin.path, bucket if exclude_bucket else None)
    remainder = _strip_prefix(source.path, prefix)
    if remainder is None:
        return url
    
    cdn = urlsplit(cdn_endpoint)
    path = cdn.path.rstrip("/") + remainder
    return urlunsplit((cdn.scheme, cdn.netloc, path, source.query, source.fragment))


def cdn_rewriter_from_settings(settings: Settings) -> Callable[[str], str]:
    """Bind rewrite_to_cdn_url to the endpoints and mode in `settings`."""
    return partial(
        rewrite_to_cdn_url,
        storage_endpoint=settings.spaces_endpoint,
        cdn_endpoint=settings.spaces_endpoint_cdn,
        bucket=settings.spaces_bucket,
        exclude_bucket=settings.spaces_cdn_dont_include_bucket
    )
