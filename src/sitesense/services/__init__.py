"""
Shared service utilities.

- http.py        - requests.Session with retry/backoff and default timeout
- geolocation.py - best-effort IP geolocation (no retries, short deadline)
"""
