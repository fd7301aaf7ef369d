"""
Abacus Backend — API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - calculate.py: GET    /api/calculate          (arithmetic on two operands)
    - comments.py:  GET    /api/comments/{id}      (fetch comment)
                    POST   /api/comments           (create comment)
                    PUT    /api/comments/{id}      (update comment)
                    DELETE /api/comments/{id}      (delete comment)
    - health.py:    GET    /health                 (service health check)

Design Principle:
    Routes are THIN: extract request data, call the service, pick the
    success status code. Business rules and error classification live in
    services.
"""
