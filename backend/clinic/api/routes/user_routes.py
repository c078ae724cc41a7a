# backend/clinic/api/routes/user_routes.py

from fastapi import APIRouter, Depends

from clinic.api.dependencies import get_role_agent, get_user_directory
from clinic.core.errors import NotFoundError
from clinic.models.directory import RoleAccess
from clinic.services.role_agent import RoleDecisionAgent
from clinic.services.user_directory import UserDirectory

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}/access", response_model=RoleAccess)
async def user_access(
    user_id: str,
    directory: UserDirectory = Depends(get_user_directory),
    role_agent: RoleDecisionAgent = Depends(get_role_agent),
):
    """Permissions and portal layout flags for a user's role."""
    user = await directory.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return role_agent.determine_access(user.role)
