"""Core application modules: logging, exceptions, middleware, background tasks."""
