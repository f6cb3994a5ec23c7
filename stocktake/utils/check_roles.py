from fastapi import Depends, HTTPException, status
from stocktake.utils.get_user import get_current_user
from stocktake.models.users.user_models import User
from stocktake.models.enums.user_role import UserRole


def require_role(roles: list[UserRole]):
    async def role_checker(user: User = Depends(get_current_user)):
        if user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Permission denied"
            )
        return user
    return role_checker
