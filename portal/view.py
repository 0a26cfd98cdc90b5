"""
List/search view: two fetchers behind one reconciler.

BROWSE shows the default listing (PropertiesHook, prioritized first load).
SEARCH shows the explicit search (PropertySearchHook, page kept in the
criteria). Switching modes never touches the other hook's state, so clearing
a search goes back to the Browse page already loaded without a request.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

from portal.card import PropertyCard
from portal.hooks import PropertiesHook, PropertySearchHook
from portal.models import Links, Meta, PaginationLink, Property
from portal.pagination import current_page_count, page_from_url, total_count
from portal.pagination import page_links as numbered_links

LOG = logging.getLogger("portal")

FILTER_LABELS = {
    "city": "Ciudad",
    "property_type": "Tipo",
    "status": "Estado",
    "bedrooms": "Recámaras",
    "bathrooms": "Baños",
    "min_price": "Precio Mín.",
    "max_price": "Precio Máx.",
    "q": "Búsqueda",
    "sort_by": "Ordenar por",
    "sort_direction": "Dirección",
}


def format_filter_name(key: str) -> str:
    return FILTER_LABELS.get(key, key)


class ViewMode(str, Enum):
    BROWSE = "browse"
    SEARCH = "search"


@dataclass
class ListViewModel:
    """What the list shows right now; always taken from exactly one source."""
    mode: ViewMode
    data: List[Property]
    meta: Optional[Meta]
    links: Optional[Links]
    loading: bool
    error: Optional[str]


class PropertyListView:
    def __init__(
        self,
        client: httpx.AsyncClient,
        on_select: Optional[Callable[[Property], Any]] = None,
    ):
        self.client = client
        self.properties = PropertiesHook(client)
        self.search = PropertySearchHook(client)
        self.mode = ViewMode.BROWSE
        self.criteria: Dict[str, Any] = {}
        self.current_main_page = 1
        self.on_select = on_select

    async def start(self) -> None:
        await self.properties.activate()

    # ---------- state ----------

    @property
    def is_searching(self) -> bool:
        return self.mode is ViewMode.SEARCH

    @property
    def view_model(self) -> ListViewModel:
        source = self.search if self.is_searching else self.properties
        return ListViewModel(
            mode=self.mode,
            data=source.data,
            meta=source.meta,
            links=source.links,
            loading=source.loading,
            error=source.error,
        )

    # ---------- actions ----------

    def set_criterion(self, key: str, value: Any) -> None:
        """Edit the pending search form. Empty values stay in the form but are never sent."""
        self.criteria = {**self.criteria, key: value}

    async def submit_search(self) -> None:
        self.mode = ViewMode.SEARCH
        self.criteria = {**self.criteria, "page": 1}
        await self.search.search_properties(self.criteria)

    def clear_search(self) -> None:
        # no refetch: the Browse hook still holds the page it loaded last
        self.mode = ViewMode.BROWSE
        self.criteria = {}

    async def change_page(self, page: int) -> None:
        if self.is_searching:
            self.criteria = {**self.criteria, "page": page}
            await self.search.search_properties(self.criteria)
        else:
            self.current_main_page = page
            await self.properties.fetch_page(page)

    async def click_link(self, link: PaginationLink) -> None:
        if link.active or not link.page:
            return
        await self.change_page(link.page)

    async def click_prev(self) -> None:
        await self._follow(self.view_model.links.prev if self.view_model.links else None)

    async def click_next(self) -> None:
        await self._follow(self.view_model.links.next if self.view_model.links else None)

    async def _follow(self, url: Optional[str]) -> None:
        page = page_from_url(url)
        if page:
            await self.change_page(page)

    async def reload(self) -> None:
        """Manual retry: fresh listing state, prioritized first load, Browse mode."""
        self.properties = PropertiesHook(self.client)
        self.search = PropertySearchHook(self.client)
        self.mode = ViewMode.BROWSE
        self.criteria = {}
        self.current_main_page = 1
        await self.start()

    def select(self, prop: Property) -> None:
        LOG.info("Propiedad seleccionada: %s", prop.id)
        if self.on_select:
            self.on_select(prop)

    # ---------- presentation ----------

    @property
    def title(self) -> str:
        return "Resultados de Búsqueda" if self.is_searching else "Todas las Propiedades"

    @property
    def show_pagination(self) -> bool:
        meta = self.view_model.meta
        return self.is_searching and meta is not None and meta.last_page > 1

    @property
    def page_links(self) -> List[PaginationLink]:
        return numbered_links(self.view_model.meta) if self.show_pagination else []

    def cards(self) -> List[PropertyCard]:
        return [PropertyCard(p, on_click=self.select) for p in self.view_model.data]

    def summary(self) -> List[str]:
        vm = self.view_model
        count = len(vm.data)
        if vm.meta is None:
            plural = "" if count == 1 else "s"
            noun = "propiedad" if count == 1 else "propiedades"
            verb = "encontrada" if self.is_searching else "mostrada"
            return [f"{count} {noun} {verb}{plural}"]
        if not self.is_searching:
            return [f"Mostrando las primeras {count} propiedades"]
        lines = [f"Mostrando {current_page_count(vm.meta)} de {total_count(vm.meta)} propiedades"]
        if vm.meta.current_page > 1:
            lines.append(f"Página {vm.meta.current_page} de {vm.meta.last_page}")
        return lines

    def active_filters(self) -> List[Tuple[str, str]]:
        meta = self.view_model.meta
        if not self.is_searching or meta is None or not meta.filters:
            return []
        return [
            (format_filter_name(key), value if isinstance(value, str) else json.dumps(value, ensure_ascii=False))
            for key, value in meta.filters.items()
        ]

    def error_message(self) -> Optional[str]:
        error = self.view_model.error
        return f"Error al cargar propiedades: {error}" if error else None
