"""
Shapes of the collaborators that live outside the engine.

The surrounding application owns profile storage, sign-in and the conversational
assistant. The engine never imports a concrete client; these protocols only
document what the application wires together around it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class ProfileStore(Protocol):
    """Profile persistence keyed by an opaque owner key."""

    def get(self, owner_key: str) -> Optional[Mapping[str, Any]]:
        ...

    def set(self, owner_key: str, profile: Mapping[str, Any]) -> None:
        ...


@runtime_checkable
class AssistantClient(Protocol):
    """Free-text assistant. Implementations raise on network/parse failure."""

    def complete(self, messages: List[Dict[str, str]], system_prompt: str) -> str:
        ...


@runtime_checkable
class AuthProvider(Protocol):
    """Identity of the signed-in user; its key doubles as the profile owner key."""

    def current_user(self) -> Optional[str]:
        ...

    def logout(self) -> None:
        ...
