"""
Messenger server.

Contact/block relationship graph, owner-controlled group chats, paginated
message history and per-user notification queues on top of async SQLAlchemy.
"""

__version__ = "1.0.0"
