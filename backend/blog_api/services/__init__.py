# Services package init
"""
Blog API Backend - Services Layer
==================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services receive the request's AsyncSession for every call, apply the
       rules and translate store failures into application exceptions.

Service Inventory:
    - CredentialService: bearer token issue/verify, password hashing
    - UserService: signup / signin
    - BlogService: blog post + tag list CRUD

Each service is stateless and exposed as a module-level singleton.
"""
