"""
API request/response schemas.

Domain models stay free of transport concerns; these schemas shape what
clients send and receive.
"""
