"""DealerSite Core Platform Module.

Shared infrastructure used by the content API:
- Repository base class and SQL fragment builders
- Authentication (admins, bearer tokens)
- Image upload storage
- Error taxonomy, logging and API helpers
"""
