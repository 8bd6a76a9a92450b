"""Authorization helpers for user management"""
from app.core.enums import UserRole
from app.core.errors import PermissionDenied


def is_admin(user) -> bool:
    return user.role == UserRole.ADMIN.value


def check_user_access(target_user_id: str, current_user) -> None:
    if not is_admin(current_user) and target_user_id != current_user.id:
        raise PermissionDenied("Forbidden: You can only manage your own account")


def check_role_change(changes: dict, current_user) -> None:
    if "role" in changes and not is_admin(current_user):
        raise PermissionDenied("Forbidden: Only admins can change roles")
