# Services package init
"""
VaultChat Backend — Services Layer
===================================

What:  Business logic layer sitting between routes (HTTP) and stores (persistence).
How:   Services receive the stores they need through their constructor and
       raise exceptions from `vaultchat.exceptions`; they never build HTTP
       responses.

Service Inventory:
    - ChatMessageService: resolve sender and destination, persist a message
    - ImageValidator:     size and MIME validation of uploaded images
    - ChatImageService:   check sender/receiver, persist image bytes
    - UserService:        registration, username checks, user listing
    - AuthService:        login and bearer-token session resolution
"""
