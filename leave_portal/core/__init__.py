"""Core utilities: constants, exceptions, middleware, security and events."""
