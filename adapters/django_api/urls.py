"""
GymOS Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("access/me", views.my_access_view),
    path("access/navigation", views.navigation_view),
    path("access/actions/<str:action>", views.action_check_view),
    path("admin/permissions", views.permission_catalog_view),
    path("admin/branches", views.branches_list_view),
    path("admin/users/<str:user_id>/access", views.user_access_view),
    path("admin/roles/assign", views.roles_assign_view),
    path("admin/roles/revoke", views.roles_revoke_view),
]
