from django.urls import path
from . import views

urlpatterns = [
    path('', views.QuoteListView.as_view(), name='quote-list'),
    path('catalog/', views.QuoteCatalogView.as_view(), name='quote-catalog'),
    path('totals/', views.TotalsPreviewView.as_view(), name='quote-totals'),
    path('<int:pk>/', views.QuoteDetailView.as_view(), name='quote-detail'),

    # Workflow
    path('<int:pk>/send/', views.QuoteActionView.as_view(workflow_action='send'), name='quote-send'),
    path('<int:pk>/accept/', views.QuoteActionView.as_view(workflow_action='accept'), name='quote-accept'),
    path('<int:pk>/reject/', views.QuoteActionView.as_view(workflow_action='reject'), name='quote-reject'),

    # Cost lines
    path('<int:pk>/costs/', views.QuoteCostLineView.as_view(), name='quote-cost-add'),
    path('<int:pk>/costs/<int:index>/', views.QuoteCostLineDeleteView.as_view(), name='quote-cost-remove'),
]
