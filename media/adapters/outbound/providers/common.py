from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

# Provider APIs only answer requests that look like they came from the TikTok web client.
BROWSER_HEADERS: Dict[str, str] = {
    "Origin": "https://www.tiktok.com",
    "Referer": "https://www.tiktok.com/",
    "Sec-Fetch-Dest": "empty",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Site": "cross-site",
}

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def browser_headers(**extra: str) -> Dict[str, str]:
    headers = dict(BROWSER_HEADERS)
    headers.update(extra)
    return headers


def load_json(body: Any) -> Optional[dict]:
    """Decode a response body into a dict, or None for anything else."""
    if isinstance(body, dict):
        return body
    if not isinstance(body, (str, bytes)) or not body:
        return None
    try:
        data = json.loads(body)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def dig(obj: Any, *path: Any) -> Any:
    """
    Walk nested dicts/lists. Any missing key, wrong container type or
    out-of-range index yields None instead of raising.
    """
    cur = obj
    for key in path:
        if isinstance(key, int):
            if not isinstance(cur, list) or not -len(cur) <= key < len(cur):
                return None
            cur = cur[key]
        else:
            if not isinstance(cur, dict):
                return None
            cur = cur.get(key)
        if cur is None:
            return None
    return cur


def qualify_url(origin: str, value: Any) -> Optional[str]:
    """
    Absolute http(s) URLs pass through, `/path` is prefixed with the provider
    origin, `//host/path` gets https. Anything else counts as absent.
    """
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not value:
        return None
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value
    if value.startswith("//"):
        return f"https:{value}"
    if value.startswith("/"):
        return f"{origin.rstrip('/')}{value}"
    return None


def qualify_all(origin: str, values: Any) -> List[str]:
    if not isinstance(values, list):
        return []
    out: List[str] = []
    for v in values:
        q = qualify_url(origin, v)
        if q:
            out.append(q)
    return out


def as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        # also covers NaN / Infinity, which json.loads accepts
        return None


def as_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
