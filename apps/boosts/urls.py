from django.urls import path
from . import views

urlpatterns = [
    path('pricing/preview/', views.price_preview, name='boost-price-preview'),
    path('requests/', views.create_boost_request, name='boost-request-create'),
    path('requests/<int:request_id>/click/', views.click, name='boost-click'),
    path('my/requests/', views.my_boost_requests, name='boost-my-requests'),
    path('track/impressions/', views.impressions, name='boost-impressions'),
    path('priorities/', views.priorities, name='boost-priorities'),
    path('admin/requests/', views.admin_boost_requests, name='boost-admin-requests'),
    path('admin/requests/<int:request_id>/status/', views.admin_update_status, name='boost-admin-status'),
    path('admin/dashboard/', views.admin_dashboard, name='boost-admin-dashboard'),
    path('admin/pricing/', views.pricing_rules, name='boost-pricing-rules'),
    path('admin/pricing/<int:rule_id>/', views.pricing_rule_detail, name='boost-pricing-rule-detail'),
    path('admin/seasonal-campaigns/', views.seasonal_campaigns, name='boost-seasonal-campaigns'),
    path('admin/seasonal-campaigns/<int:campaign_id>/', views.seasonal_campaign_detail, name='boost-seasonal-campaign-detail'),
]
