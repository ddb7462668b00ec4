from django.urls import path
from manager.views import (
    dashboard_view, chick_stock_view, approve_reject_request,
    add_feed_stock, approve_reject_feed_request,
    )


urlpatterns = [
    path('', dashboard_view, name='manager_dashboard'),
    path('chick-stock/', chick_stock_view, name='manager_chick_stock'),
    path('requests/<int:request_id>/action/', approve_reject_request, name='approve_reject_request'),

    path('feeds/add/', add_feed_stock, name='add_feed_stock'),
    path('feeds/requests/<int:request_id>/action/', approve_reject_feed_request, name='approve_reject_feed_request'),
]
