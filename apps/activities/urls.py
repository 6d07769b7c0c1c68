from django.urls import path
from .views import UserActivityListView, RepositoryActivityListView, ActivityCreateView

urlpatterns = [
    path('activities', ActivityCreateView.as_view(), name='activity-create'),
    path('activities/user/<int:user_id>', UserActivityListView.as_view(), name='user-activities'),
    path('activities/repository/<int:pk>', RepositoryActivityListView.as_view(), name='repository-activities'),
]
