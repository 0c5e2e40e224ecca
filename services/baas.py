"""
services/baas.py
────────────────────────────────────────────────────────────────────────
Supabase clients for the parts of the BaaS we don't reach over SQL:

* auth (sign-up / sign-in)  → fresh anon-key client per request, so a
  signed-in session never lives on a shared client
* storage + admin sign-out  → one cached service-role client
"""
from __future__ import annotations

from functools import lru_cache

from supabase import Client, ClientOptions, create_client

from config import settings


def _options() -> ClientOptions:
    return ClientOptions(auto_refresh_token=False, persist_session=False)


def get_auth_client() -> Client:
    return create_client(settings.supabase_url, settings.supabase_anon_key, options=_options())


@lru_cache
def _service_client() -> Client:  # pragma: no cover
    if not settings.supabase_service_role_key:
        raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY not set in environment")
    return create_client(
        settings.supabase_url, settings.supabase_service_role_key, options=_options()
    )


def get_service_client() -> Client:
    return _service_client()
