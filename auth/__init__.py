"""auth/ -- Identity provider adapters for FormFlow.

Layer rule: auth/ imports only stdlib, third-party libraries and core/.
It does NOT import from api/ or forms/.
api/ and main.py import from auth/, not the other way around.
"""
