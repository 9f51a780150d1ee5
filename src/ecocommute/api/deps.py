"""Shared request dependencies."""

from __future__ import annotations

from typing import Optional

from fastapi import Header, HTTPException, status

from ..persistence.users import UserRepository, get_user_repository


def get_current_user_id(x_user_id: Optional[str] = Header(default=None, alias="X-User-Id")) -> str:
    """Identity of the caller as established by the upstream session layer."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return x_user_id.strip()


def get_repository() -> UserRepository:
    return get_user_repository()
