"""
FILE: protask/repl/context.py
PURPOSE: Session state handed to every REPL command handler
EXPORTS:
  - REPLContext (dataclass)
  - create_context(store, surface) -> REPLContext
DEPENDENCIES:
  - protask.core.store (TaskStore)
  - protask.core.reconcile (ListReconciler)
  - protask.core.models (FilterType, SortOrder, ThemeMode)
  - protask.repl.display (ConsoleSurface)
NOTES:
  - Built once in run_repl() and passed explicitly; there is no
    module-level store
  - View parameters live on the store, the context only describes them
"""

from dataclasses import dataclass
from typing import Optional

from ..core.models import FilterType, SortOrder, ThemeMode
from ..core.reconcile import ListReconciler
from ..core.store import TaskStore
from .display import ConsoleSurface


@dataclass
class REPLContext:
    """
    Persistent context for the REPL session.

    Attributes:
        store: The loaded task store
        surface: Console surface the reconciler narrates to
        reconciler: Keeps the surface in step with the visible list
        theme: Current theme mode
    """
    store: TaskStore
    surface: ConsoleSurface
    reconciler: ListReconciler
    theme: ThemeMode = ThemeMode.DARK

    def view_parts(self) -> list:
        parts = []
        if self.store.filter is not FilterType.ALL:
            parts.append(self.store.filter.value)
        if self.store.search_query:
            parts.append(f'"{self.store.search_query}"')
        if self.store.sort_order is SortOrder.DESCENDING:
            parts.append("low first")
        return parts

    def get_prompt(self) -> str:
        """
        Generate prompt string based on current view.

        Returns:
            Prompt like "protask> " or "protask:[pending | "milk"]> "
        """
        parts = self.view_parts()
        if parts:
            return f"protask:[{' | '.join(parts)}]> "
        return "protask> "

    def view_title(self) -> str:
        parts = self.view_parts()
        if parts:
            return f"Tasks ({', '.join(parts)})"
        return "Tasks"


def create_context(
    store: TaskStore,
    surface: Optional[ConsoleSurface] = None,
    theme: ThemeMode = ThemeMode.DARK,
) -> REPLContext:
    surface = surface or ConsoleSurface()
    reconciler = ListReconciler(store, surface)
    return REPLContext(store=store, surface=surface, reconciler=reconciler, theme=theme)
