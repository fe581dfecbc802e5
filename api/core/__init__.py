"""
Shared building blocks for the API.

`core/` holds wiring that is not specific to one resource: the database
handle, environment settings, logging setup, error rendering and the CORS
policy. Resource SQL and request handling live in their feature package
(e.g. `products/`).
"""
