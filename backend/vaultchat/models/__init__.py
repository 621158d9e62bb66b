# Models package init
"""
VaultChat Backend — ORM Models
===============================

Importing this package registers every table on `Base.metadata`
(used by Alembic and by relationship resolution).
"""

from vaultchat.models.user import User
from vaultchat.models.chat import ChatImage, ChatMessage, Group, PrivateChat

__all__ = ["User", "Group", "PrivateChat", "ChatMessage", "ChatImage"]
