"""
DOMAIN LAYER

This layer contains:
- Entities: Business objects with identity (User, Conversation, Message)
- Value Objects: Immutable types (UserId, UserEmail, ConversationId, MessageId)
- Ports: Interfaces that infrastructure implements (repositories)
- Exceptions: Domain-specific errors, mapped to HTTP statuses by the presentation layer

RULES:
1. NO framework imports (no FastAPI, Prisma, Pydantic, etc.)
2. NO I/O operations
3. Only depends on Python stdlib
"""
