from django.urls import path

from . import views

app_name = "signature"

urlpatterns = [
    path("<str:token>/", views.sign_document, name="sign_document"),
]
