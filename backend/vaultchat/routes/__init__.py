# Routes package init
"""
VaultChat Backend — API Routes Package
=======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - auth.py:    POST /api/auth/register    (create an account)
                  POST /api/auth/login       (obtain a bearer token)
    - users.py:   GET  /api/users            (list users)
    - chat.py:    POST /api/chat/messages    (send a chat message)
                  POST /api/chat/upload-image (upload a chat image)
    - health.py:  GET  /health               (service health check)

Routes stay thin: extract request data, call a service, shape the response.
Errors propagate to the global handlers in `vaultchat.main`.
"""
