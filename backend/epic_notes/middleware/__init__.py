# Middleware package init
"""
Epic Notes Backend: Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first: every later log line can include it
    2. Logging: records status and duration on the way back out
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
