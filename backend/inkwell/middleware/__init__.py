# Middleware package init
"""
Inkwell Backend: Middleware Package
======================================

Middleware chain (outermost first):
    Request → [CORS] → [Request ID] → [Logging] → [Errors] → [GZip] → Router

    - CORS answers preflight requests and decorates every response
    - Request ID tags the request before anything logs
    - Logging records status and duration once the response exists
    - Errors turns unhandled exceptions into the generic 500 body

auth.py is not ASGI middleware: it is the bearer-token dependency that
protected routes declare.
"""
