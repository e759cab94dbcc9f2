from django.urls import path
from . import views

urlpatterns = [
    path('', views.ShipmentListView.as_view(), name='shipment-list'),
    path('<int:pk>/', views.ShipmentDetailView.as_view(), name='shipment-detail'),

    # Tracking
    path('<int:pk>/events/', views.TrackingEventListView.as_view(), name='shipment-events'),
    path('track/<str:number>/', views.TrackingView.as_view(), name='shipment-track'),
]
