"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- commands/  → Write operations (register, login, resolve conversation, send message)
- queries/   → Read operations (identity, users, conversations, chat history)
- dto/       → Data Transfer Objects for the API
- common/    → Shared interfaces (Command, Query base classes)

Rules:
- Depends on Domain layer only (plus the security primitives for login)
- No HTTP/framework code here
"""
