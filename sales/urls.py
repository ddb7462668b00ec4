from django.urls import path
from sales.views import submit_request, log_call_view

urlpatterns = [
    path('request/', submit_request, name='submit_chick_request'),
    path('calls/', log_call_view, name='log_call'),
]
