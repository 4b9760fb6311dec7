"""
COMMANDS - Write operations (CQRS)

Subfolders:
- auth/          → register_user, login
- conversations/ → resolve_conversation, open_conversation
- chat/          → send_message
"""
