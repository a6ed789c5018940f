"""Infrastructure adapters: HTTP gateway, notification triggers."""
