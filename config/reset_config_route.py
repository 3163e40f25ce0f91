# config/reset_config_route.py
from fastapi import APIRouter, Depends
from app.users.auth_cache import AuthCache
from app.users.auth_dependencies import get_auth_cache, get_current_admin
from app.users.user_models.schemas import AuthContext

router = APIRouter(prefix="/admin", tags=["admin"])

@router.post("/clear-auth-cache")
async def clear_auth_cache(
    admin: AuthContext = Depends(get_current_admin),
    cache: AuthCache = Depends(get_auth_cache),
):
    """
    Drop every cached identity so the next request re-reads users from the database.
    Admin-only operation.
    """
    cleared = len(cache)
    cache.clear()

    return {
        "message": "Auth cache cleared",
        "cleared_entries": cleared,
        "reset_by": admin.email
    }
