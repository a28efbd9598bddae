"""Auth Service - the authentication application.

Wires auth_core into a runnable service:
- application/     AuthenticationService (login, register, resolve token)
- presentation/    FastAPI transport and Typer CLI

Configuration lives in auth_config.
"""
