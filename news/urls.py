from django.urls import path
from . import views

urlpatterns = [
    path('', views.collect_news_view, name='collect_news'),
]
