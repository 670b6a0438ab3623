from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from .models import Word
from .puzzles import EngineRegistry, Verdict, evaluate
from .puzzles.chain import WordPredicate
from .serializers import EvaluateRequestSerializer, VerdictSerializer

logger = logging.getLogger(__name__)


def _dictionary() -> Optional[WordPredicate]:
    """Word-table lookup used by chain puzzles, when enabled."""
    if not getattr(settings, "PUZZLES", {}).get("DICTIONARY_FALLBACK", True):
        return None
    return Word.objects.accepts


# PUBLIC_INTERFACE
@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def health(request):
    """Health check endpoint for the API.

    Returns:
    - 200 OK with {"message": "Server is up!"}
    """
    return Response({"message": "Server is up!"})


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="evaluate_puzzle",
    operation_summary="Evaluate a player's input against a puzzle",
    operation_description="""
Judge one player action against a puzzle document.

Request body:
- puzzle.kind (string, required): word, code, sequence, path, trail, grid,
  chain, group, arithmetic, anagram, text, hangman, crossword, word_search,
  spelling_bee, letter_grid, nonogram, flow or sliding
- puzzle.data (object): kind-specific puzzle fields
- input (any JSON): the player's current input

Response:
- kind, is_correct, feedback (kind-specific object or null)

A puzzle document that does not validate yields 400. An unrecognised kind
or an input of the wrong shape yields 200 with is_correct=false.
""",
    request_body=EvaluateRequestSerializer,
    responses={200: VerdictSerializer},
    tags=["puzzles"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def evaluate_puzzle(request):
    """Evaluate a player's input and return the verdict."""
    serializer = EvaluateRequestSerializer(data=request.data or {})
    if not serializer.is_valid():
        logger.warning("Rejected puzzle document: %s", serializer.errors)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    vd = serializer.validated_data

    puzzle = vd["puzzle"]
    spec = puzzle["spec"]
    if spec is None:
        logger.warning("No engine for puzzle kind %r", puzzle["kind"])
        verdict = Verdict.failure(puzzle["kind"])
    else:
        verdict = evaluate(spec, vd["input"], dictionary=_dictionary())

    return Response(VerdictSerializer(verdict.to_dict()).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="get_puzzle_types",
    operation_summary="List available puzzle types",
    operation_description="Returns the puzzle kinds this service can evaluate.",
    tags=["meta"],
    responses={200: openapi.Response("OK", schema=openapi.Schema(type=openapi.TYPE_ARRAY, items=openapi.Items(type=openapi.TYPE_STRING)))},
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def get_puzzle_types(request):
    """List available puzzle engine types."""
    return Response(EngineRegistry.kinds(), status=status.HTTP_200_OK)
