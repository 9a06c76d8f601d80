"""
Supabase client factory for the i18n layer.

Creates clients tagged with the caller's language so database-side views and
functions can resolve translations, and provides the response/error wrapper
used by every query in the query builder.
"""

from typing import Any, Optional

from rich.console import Console
from supabase import Client, ClientOptions, create_client

from config.settings import SupabaseConfig, config

from .demo_client import DemoClient
from .errors import NoDataError, SupabaseError

console = Console()

LANGUAGE_SETTING = "app.current_language"


def create_i18n_client(
    language_id: str = "he",
    supabase_config: Optional[SupabaseConfig] = None,
):
    """
    Create a Supabase client carrying a language context header.

    Args:
        language_id: Language the client will request content in
        supabase_config: Connection settings (defaults to global config)

    Returns:
        A supabase Client, or a DemoClient when credentials are missing
    """
    supabase_config = supabase_config or config.supabase

    if not supabase_config.is_configured:
        console.print(
            "[yellow]Warning: Missing Supabase credentials. Running in demo mode; "
            "translations will fall back to their keys.[/yellow]"
        )
        return DemoClient(language_id)

    options = ClientOptions(
        schema=supabase_config.schema,
        headers={
            "x-application-name": supabase_config.application_name,
            "x-language-context": language_id,
        },
        postgrest_client_timeout=supabase_config.timeout_seconds,
    )
    client: Client = create_client(supabase_config.url, supabase_config.key, options)
    return client


def handle_response(query: Any) -> Any:
    """
    Execute a query and return its data.

    Args:
        query: A postgrest request builder, or an already executed response

    Returns:
        The response's data payload

    Raises:
        NoDataError: The query succeeded but returned no payload
        SupabaseError: Any database or transport failure
    """
    try:
        response = query.execute() if hasattr(query, "execute") else query
    except Exception as e:
        raise SupabaseError.from_exception(e) from e

    data = getattr(response, "data", None)
    if data is None:
        raise NoDataError()
    return data


def set_language_context(client: Any, language_id: str) -> bool:
    """
    Store the language in the database session for multilingual views.

    Failing to set it is not fatal: the views fall back to the default
    language, so a warning is printed and False returned.

    Args:
        client: Supabase (or demo) client
        language_id: Language code to set

    Returns:
        True if the setting was applied
    """
    if getattr(client, "is_demo", False):
        return False

    try:
        client.rpc(
            "set_config",
            {
                "setting_name": LANGUAGE_SETTING,
                "new_value": language_id,
                "is_local": False,
            },
        ).execute()
        return True
    except Exception as e:
        console.print(
            f"[yellow]Warning: Could not set language context '{language_id}': {e}[/yellow]"
        )
        return False
