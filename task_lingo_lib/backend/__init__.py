from task_lingo_lib.backend.supabase import SupabaseClient

__all__ = ["SupabaseClient"]
