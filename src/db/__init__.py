"""
Database access for the i18n layer.

- create_i18n_client: Supabase client with a language context header
- handle_response: execute a query and unwrap its data
- set_language_context: push the language into the database session
- SupabaseError / NoDataError: error types with stable codes
- DemoClient: offline client used when credentials are missing
"""

from .client import create_i18n_client, handle_response, set_language_context
from .demo_client import DemoClient
from .errors import NoDataError, SupabaseError

__all__ = [
    "create_i18n_client",
    "handle_response",
    "set_language_context",
    "DemoClient",
    "NoDataError",
    "SupabaseError",
]
