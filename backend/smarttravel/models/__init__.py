# smarttravel/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: User account and authentication model
- ChatMessage: One turn of a user's chat history (belongs to User)
- ChatRole: Allowed chat message roles
- Trip: Trip planned by a user (belongs to User)
"""
from .user import User
from .chat_message import ChatMessage, ChatRole
from .trip import Trip
