from django.urls import path
from . import views

urlpatterns = [
    path('', views.list_drafts_view, name='list_drafts'),
    path('<int:draft_id>/approve/', views.approve_draft_view, name='approve_draft'),
    path('<int:draft_id>/reject/', views.reject_draft_view, name='reject_draft'),
    path('<int:draft_id>/copy/', views.copy_draft_view, name='copy_draft'),
]
