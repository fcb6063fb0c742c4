from .chat import (  # noqa: F401
    LLM_ATTEMPTS,
    ChatOrchestrator,
    DobbyError,
    UpstreamCompletionFailure,
)
from .deps import get_chat_service  # noqa: F401
