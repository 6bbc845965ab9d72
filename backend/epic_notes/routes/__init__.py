# Routes package init
"""
Epic Notes Backend: HTTP Routes Package
==========================================

Route Inventory:
    - notes.py:   GET  /users/{username}/notes/{note_id}/edit   (edit loader)
                  POST /users/{username}/notes/{note_id}/edit   (edit action)
                  GET  /users/{username}/notes/{note_id}        (note page)
    - health.py:  GET  /health                                  (service health check)

Routes stay thin: read the request, call a service, pick the response
format. Validation and persistence live in services/note_service.py.
"""
