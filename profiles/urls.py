from django.urls import path

from profiles import views

app_name = 'profiles'

urlpatterns = [
    # Profile administration
    path('admin/config/people/profiles/', views.profile_overview, name='overview_profiles'),
    path('admin/config/people/profiles/actions/delete/', views.profile_stage_delete, name='stage_delete'),
    path('admin/config/people/profiles/delete/', views.profile_multiple_delete_confirm, name='multiple_delete_confirm'),

    # Profile types
    path('admin/config/people/profiles/types/', views.profile_type_list, name='overview_types'),
    path('admin/config/people/profiles/types/add/', views.profile_type_add_form, name='type_add_form'),
    path('admin/config/people/profiles/types/manage/<str:code>/', views.profile_type_detail, name='type_edit'),
    path('admin/config/people/profiles/types/manage/<str:code>/delete/', views.profile_type_delete, name='type_delete'),

    # Profile fields
    path('admin/config/people/profiles/types/manage/<str:code>/fields/', views.field_list, name='field_overview'),
    path('admin/config/people/profiles/types/manage/<str:code>/fields/<str:field_name>/', views.field_detail, name='field_edit'),

    # Registration
    path('user/register/form/', views.registration_form, name='register_form'),
    path('user/register/', views.register, name='register'),

    # Profiles of a user
    path('user/<int:uid>/', views.user_profiles, name='user_view'),
    path('user/<int:uid>/edit/<str:code>/', views.user_profile_type, name='user_edit_type'),
    path('user/<int:uid>/edit/<str:code>/<int:profile_id>/', views.user_profile_detail, name='user_edit_profile'),

    path('local-tasks/', views.local_tasks, name='local_tasks'),
]
