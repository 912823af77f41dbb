from .components import ROUTES, ComponentRoute, reduce_component
from .data_loading import reduce_data_loading
from .document_stack import reduce_document_stack
from .navigation import reduce_navigation
from .scores import SCORES_PATH, EnterBoxSelection, ExitBoxSelection, SelectDate, reduce_scores
from .settings import reduce_settings
from .standings import STANDINGS_PATH, CycleView, EnterBrowseMode, ExitBrowseMode
from .system import reduce_system

__all__ = [
    "ROUTES",
    "SCORES_PATH",
    "STANDINGS_PATH",
    "ComponentRoute",
    "CycleView",
    "EnterBoxSelection",
    "EnterBrowseMode",
    "ExitBoxSelection",
    "ExitBrowseMode",
    "SelectDate",
    "reduce_component",
    "reduce_data_loading",
    "reduce_document_stack",
    "reduce_navigation",
    "reduce_scores",
    "reduce_settings",
    "reduce_system",
]
