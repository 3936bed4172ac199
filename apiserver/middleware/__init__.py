"""
jsau-apiserver — Middleware Package
====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [No-Store] → [CORS] → [Errors] → Route

    1. Request ID first: every later log line can include it
    2. Access log: measures duration and logs the final status
    3. No-Store: forces Cache-Control on every response
    4. CORS: FastAPI's CORSMiddleware (handles preflight)
    5. Errors: unexpected exceptions become the JSON 500 here, so the
       response still goes back out through 1-4
"""
