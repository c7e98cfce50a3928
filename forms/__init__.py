"""forms/ -- The validate -> submit -> resolve workflow shared by the login,
signup and register forms.

Layer rule: forms/ imports from core/ only. Concrete collaborators (HTTP
client, identity provider, navigator) are injected by api/ or main.py.
"""
