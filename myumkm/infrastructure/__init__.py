"""
Infrastructure Layer - Technical implementations of domain ports.

This layer contains:
- persistence/: Repository implementations (in-memory and Prisma)
- security/: Credential codec (JWT) and password hashing
"""
