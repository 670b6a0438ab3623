from django.urls import path
from .views import (
    health,
    evaluate_puzzle,
    get_puzzle_types,
)

urlpatterns = [
    path('health/', health, name='Health'),
    path('evaluate', evaluate_puzzle, name='evaluate'),
    path('puzzle-types', get_puzzle_types, name='get-puzzle-types'),
]
