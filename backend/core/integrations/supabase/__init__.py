from core.integrations.supabase.settings import SupabaseSettings, load_supabase_settings
from core.integrations.supabase.client import SupabaseClient, create_supabase
from core.integrations.supabase.auth import SupabaseAuthBackend
from core.integrations.supabase.storage import SupabaseStorage, StorageApiError
from core.integrations.supabase.session_storage import FileSessionStorage

__all__ = [
    "SupabaseSettings",
    "load_supabase_settings",
    "SupabaseClient",
    "create_supabase",
    "SupabaseAuthBackend",
    "SupabaseStorage",
    "StorageApiError",
    "FileSessionStorage",
]
