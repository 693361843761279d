# app/utils/request_metadata.py
from dataclasses import dataclass
from typing import Optional
from fastapi import Request
from app.config import settings

UNKNOWN_IP = "unknown"

@dataclass(frozen=True)
class RequestMetadata:
    user_agent: Optional[str]
    ip_address: str
    referrer: Optional[str]
    session_id: Optional[str]


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, then "unknown" """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop

    return request.headers.get("x-real-ip") or UNKNOWN_IP


def extract_request_metadata(request: Request, session_id: Optional[str] = None) -> RequestMetadata:
    """Collect the visitor metadata every landing endpoint records.

    An explicit session id (sent in the request body) wins over the
    session cookie.
    """
    return RequestMetadata(
        user_agent=request.headers.get("user-agent") or None,
        ip_address=client_ip(request),
        referrer=request.headers.get("referer") or None,
        session_id=session_id or request.cookies.get(settings.session_cookie_name) or None
    )
