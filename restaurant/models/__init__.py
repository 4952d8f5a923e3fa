"""
Domain models shared by the API layer, services and the client package.
"""
