"""Centralized FastAPI dependency type aliases.

Import these ``*Dep`` aliases in route modules instead of writing
``Annotated[T, Depends(get_xxx)]`` everywhere.  Each alias maps to one
``get_*`` factory, overridable in tests via
``app.dependency_overrides[get_xxx] = ...``.
"""

from typing import Annotated

from fastapi import Depends

from dobby.core.personas import PersonaRegistry
from dobby.core.service import ChatOrchestrator, get_chat_service
from dobby.core.service.deps import get_persona_registry

ChatServiceDep = Annotated[ChatOrchestrator, Depends(get_chat_service)]
PersonaRegistryDep = Annotated[PersonaRegistry, Depends(get_persona_registry)]
