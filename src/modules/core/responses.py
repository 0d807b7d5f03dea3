"""Success envelope helpers shared by every API view."""

from __future__ import annotations

from typing import Any

from rest_framework import status
from rest_framework.response import Response


def success(data: Any, status_code: int = status.HTTP_200_OK) -> Response:
    return Response({"success": True, "data": data}, status=status_code)


def confirmation(message: str) -> Response:
    return Response({"success": True, "message": message}, status=status.HTTP_200_OK)
