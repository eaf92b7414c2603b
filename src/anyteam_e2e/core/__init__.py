"""
Resilient element interaction and multi-step flow orchestration.

- ElementResolver: first visible element from a prioritized candidate list
- InteractionExecutor: gentle interaction with one forced retry
- CompletionDetector: race of independent completion signals
- Flow: ordered mandatory/optional steps with write-once state
- SessionBridge: the single active page across tabs and popups
"""

from .detector import (
    CompletionDetector,
    CompletionResult,
    Signal,
    element_visible,
    load_state,
    new_page,
    page_closed,
    popup,
    url_host_contains,
    url_matches,
)
from .executor import Action, InteractionExecutor
from .flow import (
    Flow,
    FlowContext,
    FlowResult,
    FlowState,
    FlowStatus,
    FlowStep,
    FlowTimeout,
)
from .resolver import Candidates, ElementResolver, ResolvedElement
from .session import SessionBridge

__all__ = [
    "Action",
    "Candidates",
    "CompletionDetector",
    "CompletionResult",
    "ElementResolver",
    "Flow",
    "FlowContext",
    "FlowResult",
    "FlowState",
    "FlowStatus",
    "FlowStep",
    "FlowTimeout",
    "InteractionExecutor",
    "ResolvedElement",
    "SessionBridge",
    "Signal",
    "element_visible",
    "load_state",
    "new_page",
    "page_closed",
    "popup",
    "url_host_contains",
    "url_matches",
]
