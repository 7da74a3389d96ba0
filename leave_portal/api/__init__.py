"""
HTTP API: dependencies and versioned routers.
"""
