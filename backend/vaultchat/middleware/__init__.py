# Middleware package init
"""
VaultChat Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: assign or propagate X-Request-ID for log correlation
    2. Logging:    one access log line per request with status and duration
    3. CORS:       FastAPI's CORSMiddleware (handles preflight)
"""
