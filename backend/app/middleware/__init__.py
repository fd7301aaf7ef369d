"""
Abacus Backend — Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the ID; the
    response passes back through the chain in reverse, picking up the
    X-Request-ID header on the way out.
"""
