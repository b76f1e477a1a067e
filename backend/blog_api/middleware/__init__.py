# Middleware package init
"""
Blog API Backend - Middleware Package
======================================

Middleware Chain:
    Request → [Request ID] → [Access Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so that every later log line carries the id
    - Access Logging sees the final status code and the user id set by the
      auth gate on request.state
"""
