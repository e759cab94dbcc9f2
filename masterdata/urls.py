from django.urls import path
from . import views

urlpatterns = [
    path('<slug:collection>/', views.EntityListView.as_view(), name='entity-list'),
    path('<slug:collection>/<int:pk>/', views.EntityDetailView.as_view(), name='entity-detail'),
]
