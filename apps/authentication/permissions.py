from rest_framework.permissions import BasePermission

class IsSeller(BasePermission):
    message = 'Seller account required.'

    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            request.user.role not in ['admin', 'manager'] and
            not request.user.is_blocked
        )

class IsBoostAdmin(BasePermission):
    """Pricing rules and seasonal campaigns are admin-only."""

    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            request.user.is_boost_admin
        )

class IsBoostManager(BasePermission):
    """Admins, or staff flagged with can_manage_boosts, moderate requests."""

    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            request.user.is_boost_manager
        )
