"""Application layer: ports, DTOs, use cases and board services.

Depends only on the domain and protocol definitions (DIP).
Infrastructure implements the interfaces (gateway, notification triggers).
"""
