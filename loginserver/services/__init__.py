"""Persistence, password hashing and token signing for the login server."""
