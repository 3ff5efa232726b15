# src/ngo_registry/middleware/security_headers.py

from fastapi import Request

async def security_headers_middleware(request: Request, call_next):
    resp = await call_next(request)
    # JSON API: nothing may be framed, sniffed or scripted
    resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
    resp.headers["X-Content-Type-Options"] = "nosniff"
    resp.headers["X-Frame-Options"] = "DENY"
    resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    resp.headers.setdefault("Cache-Control", "no-store")
    return resp
