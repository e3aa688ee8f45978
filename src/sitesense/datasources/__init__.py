"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, shared request helper
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Fetch functions validate the response into ``sitesense.schemas`` models at
the boundary, so nothing downstream touches raw JSON.
"""
