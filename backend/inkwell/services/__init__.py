# Services package init
"""
Inkwell Backend: Services Package
====================================

    - credentials.py:   bcrypt password hashing, PyJWT token issue/verify
    - user_service.py:  signup, signin, profile
    - blog_service.py:  create, update, feed, read (+1 view), like

Each module exposes a class and a module-level singleton built from
`inkwell.config.settings`. Services receive the request's Store on every
call and hold no per-request state.
"""
