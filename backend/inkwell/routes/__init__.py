# Routes package init
"""
Inkwell Backend: API Routes Package
======================================

Route Inventory:
    - user.py:    /user/signup, /user/signin, /user/profile/{username}
    - blog.py:    /blog, /blog/bulk, /blog/{id}, /blog/{id}/like
    - health.py:  /health (outside the versioned prefix)

Routes are thin. They extract the request data, run the matching check in
inkwell.validation, call a service and return its response model.
"""
