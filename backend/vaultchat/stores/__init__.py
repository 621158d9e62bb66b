# Stores package init
"""
VaultChat Backend — Persistence Stores
=======================================

What:  One persistence-facing class per record type.
How:   Each store wraps the request's AsyncSession and exposes lookups plus
       an `insert` that returns the persisted entity or its generated id.
       Stores flush but never commit; the session dependency commits once
       the request succeeds.

Store Inventory:
    - UserStore:         users (by id, by username, uniqueness check, insert)
    - GroupStore:        groups (by id)
    - PrivateChatStore:  private chats (by id)
    - ChatMessageStore:  chat messages (insert)
    - ChatImageStore:    chat images (insert returning generated id)
"""

from vaultchat.stores.chat import ChatImageStore, ChatMessageStore
from vaultchat.stores.conversations import GroupStore, PrivateChatStore
from vaultchat.stores.users import UserStore

__all__ = [
    "UserStore",
    "GroupStore",
    "PrivateChatStore",
    "ChatMessageStore",
    "ChatImageStore",
]
