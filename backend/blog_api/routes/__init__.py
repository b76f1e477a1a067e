# Routes package init
"""
Blog API Backend - API Routes Package
======================================

Route Inventory:
    - auth.py:    POST /signup, POST /signin           (public)
    - posts.py:   GET/POST /posts, GET/PUT/DELETE /posts/{id}   (token required)
    - health.py:  GET  /health                         (public)

GET / is registered directly on the app in main.py.

Routes stay thin: extract input, call a service, shape the response.
Status codes for failures come from the global exception handlers.
"""
